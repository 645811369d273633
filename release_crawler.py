"""
Release Date Crawler

Fetches a release schedule page and extracts release dates:
- fetch: download the page and print the HTML
- parse: read HTML from stdin and print release dates as JSON
- run: fetch TARGET_URL and print release dates as JSON
"""

import os
import sys
import logging
import argparse

from pydantic import ValidationError

from crawler_config import Config, ConfigError
from extractors.release_page import (
    ParseConfigurationError,
    compile_selectors,
    count_selector_matches,
    extract_release_dates
)
from http_client import HttpClient, HttpRequestError
from release_models import dump_releases

logger = logging.getLogger(__name__)


def _fetch_html(url: str) -> str:
    client = HttpClient()
    try:
        return client.fetch_html(url)
    finally:
        client.close()


def _print_releases(html: str, verbose_selectors: bool = False) -> None:
    """Extract releases from HTML and print them as JSON."""
    selectors = compile_selectors()

    if verbose_selectors:
        for name, count in count_selector_matches(html, selectors).items():
            logger.info(f"  Selector '{name}': {count} matches")

    releases = extract_release_dates(html, selectors)
    print(dump_releases(releases))


def _run_fetch(args):
    """Fetch a page and write the HTML to stdout."""
    if not args.url:
        logger.error("No URL provided! Use --url or set TARGET_URL")
        sys.exit(1)

    # Stdout carries the raw page for piping into `parse`
    sys.stdout.write(_fetch_html(args.url))


def _run_parse(args):
    """Parse HTML from stdin (or --input) and print release dates."""
    if args.input:
        with open(args.input, 'r', encoding='utf-8') as f:
            html = f.read()
    else:
        html = sys.stdin.read()

    _print_releases(html, args.verbose_selectors)


def _run_all(args):
    """Fetch TARGET_URL and print release dates."""
    config = Config.from_env()
    html = _fetch_html(config.target_url)
    _print_releases(html, args.verbose_selectors)


def build_parser():
    parser = argparse.ArgumentParser(
        prog='rrdc',
        description='Release Date Crawler - fetch and extract release dates',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  rrdc fetch --url https://example.com/releases > page.html
  rrdc parse < page.html
  rrdc fetch | rrdc parse
  TARGET_URL=... GOOGLE_CALENDAR_ID=... rrdc run
        """
    )
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', required=True)

    fetch_parser = subparsers.add_parser('fetch', help='Fetch HTML from a URL and print it')
    fetch_parser.add_argument('-u', '--url', default=os.environ.get('TARGET_URL'),
                              help='URL to fetch (default: $TARGET_URL)')
    fetch_parser.set_defaults(handler=_run_fetch)

    parse_parser = subparsers.add_parser('parse', help='Parse HTML from stdin and print JSON')
    parse_parser.add_argument('--input', help='Read HTML from a file instead of stdin')
    parse_parser.add_argument('--verbose-selectors', action='store_true',
                              help='Log match counts for the release selectors')
    parse_parser.set_defaults(handler=_run_parse)

    run_parser = subparsers.add_parser('run', help='Fetch TARGET_URL and print JSON')
    run_parser.add_argument('--verbose-selectors', action='store_true',
                            help='Log match counts for the release selectors')
    run_parser.set_defaults(handler=_run_all)

    return parser


def main(argv=None):
    """Main entry point with argument parsing."""
    args = build_parser().parse_args(argv)

    # Logs go to stderr so stdout stays pipeable
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    try:
        args.handler(args)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)
    except HttpRequestError as e:
        logger.error(f"HTTP request failed: {e}")
        sys.exit(1)
    except ParseConfigurationError as e:
        logger.error(f"HTML parsing error: {e}")
        sys.exit(1)
    except ValidationError as e:
        logger.error(f"Invalid release data: {e}")
        sys.exit(1)
    except OSError as e:
        logger.error(f"IO error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
