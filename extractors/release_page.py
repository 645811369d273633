"""
Pure extraction functions for release date pages.

These functions are unit-testable and don't perform I/O.
A release schedule page carries its data in two shapes:
- `.information` blocks with `.date`, `.subject` and `.theme` children
- a `var p = ...` script that assigns `p[N]={...};` object literals
"""

from typing import List, Dict, Optional
from dataclasses import dataclass
from datetime import date, datetime
import json
import logging
import re

from bs4 import BeautifulSoup, Tag
import soupsieve as sv

from release_models import ReleaseDate

logger = logging.getLogger(__name__)

# `2024年12月25日(水)` -> `2024年12月25日`
WEEKDAY_SUFFIX_PATTERN = re.compile(r"\([^)]+\)$")

# `p[0]={...};` - stops at the first `}`, nested objects get truncated
SCRIPT_ENTRY_PATTERN = re.compile(r"p\[\d+\]=(\{[^}]+\});")

SCRIPT_MARKER = "var p ="
JAPANESE_DATE_FORMAT = "%Y年%m月%d日"


class ParseConfigurationError(ValueError):
    """A fixed selector could not be compiled."""


@dataclass(frozen=True)
class ReleaseSelectors:
    """Precompiled selectors shared by both extraction passes."""
    information: sv.SoupSieve
    date: sv.SoupSieve
    subject: sv.SoupSieve
    theme: sv.SoupSieve
    script: sv.SoupSieve


def _compile(css: str) -> sv.SoupSieve:
    try:
        return sv.compile(css)
    except sv.SelectorSyntaxError as e:
        raise ParseConfigurationError(f"Invalid selector {css!r}: {e}") from e


def compile_selectors(information_css: str = ".information",
                      date_css: str = ".date",
                      subject_css: str = ".subject",
                      theme_css: str = ".theme",
                      script_css: str = "script") -> ReleaseSelectors:
    """
    Compile the selectors used to locate release data.

    Args:
        information_css: Selector for a release block
        date_css: Selector for the date inside a block
        subject_css: Selector for the product name inside a block
        theme_css: Selector for the optional title suffix inside a block
        script_css: Selector for embedded scripts

    Returns:
        ReleaseSelectors instance, reusable across documents

    Raises:
        ParseConfigurationError: If a selector is syntactically invalid
    """
    return ReleaseSelectors(
        information=_compile(information_css),
        date=_compile(date_css),
        subject=_compile(subject_css),
        theme=_compile(theme_css),
        script=_compile(script_css)
    )


def parse_japanese_date(date_str: str) -> Optional[date]:
    """
    Parse a date like `2024年12月25日(水)`.

    A trailing parenthesized weekday is dropped before parsing.
    Anything that doesn't fit the grammar (including `未定`) gives None.

    Args:
        date_str: Date text from the page

    Returns:
        date instance, or None when the date is undetermined
    """
    cleaned = WEEKDAY_SUFFIX_PATTERN.sub("", date_str.strip())
    try:
        return datetime.strptime(cleaned, JAPANESE_DATE_FORMAT).date()
    except ValueError:
        return None


def _first_text(scope: Tag, selector: sv.SoupSieve) -> Optional[str]:
    """Return the first text node of the first match, or None."""
    element = selector.select_one(scope)
    if element is None:
        return None

    return next(element.strings, None)


def _first_stripped_text(scope: Tag, selector: sv.SoupSieve) -> Optional[str]:
    """Like _first_text, but trimmed; blank text counts as absent."""
    text = _first_text(scope, selector)
    if text is None:
        return None

    text = text.strip()
    return text or None


def extract_static_releases(soup: BeautifulSoup,
                            selectors: ReleaseSelectors) -> List[ReleaseDate]:
    """
    Extract releases from `.information` blocks.

    Blocks without a subject are skipped, even if they have a theme
    or a date.

    Args:
        soup: Parsed document
        selectors: Compiled selectors

    Returns:
        List of ReleaseDate in document order
    """
    results = []

    for block in selectors.information.select(soup):
        date_text = _first_text(block, selectors.date)
        release_date = parse_japanese_date(date_text) if date_text is not None else None

        subject = _first_stripped_text(block, selectors.subject)
        theme = _first_stripped_text(block, selectors.theme)

        if subject is None:
            logger.debug("Skipping information block without subject")
            continue

        title = f"{subject} {theme}" if theme is not None else subject
        results.append(ReleaseDate(title=title, date=release_date))

    return results


def extract_script_releases(soup: BeautifulSoup,
                            selectors: ReleaseSelectors) -> List[ReleaseDate]:
    """
    Extract releases from `p[N]={...};` assignments in scripts.

    Single quotes in the payload are swapped for double quotes before
    decoding, so values containing an apostrophe fail to decode and are
    dropped along with any other malformed entry.

    Args:
        soup: Parsed document
        selectors: Compiled selectors

    Returns:
        List of ReleaseDate in document order
    """
    results = []

    for script in selectors.script.select(soup):
        script_content = script.get_text()

        if SCRIPT_MARKER not in script_content:
            continue

        for match in SCRIPT_ENTRY_PATTERN.finditer(script_content):
            json_str = match.group(1).replace("'", '"')

            try:
                data = json.loads(json_str)
            except (json.JSONDecodeError, RecursionError):
                logger.debug(f"Skipping undecodable script entry: {json_str[:60]}")
                continue

            if not isinstance(data, dict):
                continue

            title = data.get('title')
            if not isinstance(title, str) or not title.strip():
                continue

            date_str = data.get('release-date')
            release_date = parse_japanese_date(date_str) if isinstance(date_str, str) else None

            results.append(ReleaseDate(title=title, date=release_date))

    return results


def extract_release_dates(html: str,
                          selectors: Optional[ReleaseSelectors] = None) -> List[ReleaseDate]:
    """
    Extract every release from a release schedule page.

    Static `.information` blocks come first, then script entries,
    each group in document order. Duplicates are kept.

    Args:
        html: HTML content to parse
        selectors: Compiled selectors (compiled on the fly if omitted)

    Returns:
        List of ReleaseDate
    """
    logger.info("Parsing HTML for release dates")

    if selectors is None:
        selectors = compile_selectors()

    soup = BeautifulSoup(html, 'lxml')

    results = []
    results.extend(extract_static_releases(soup, selectors))
    results.extend(extract_script_releases(soup, selectors))

    logger.info(f"Found {len(results)} release dates")
    return results


def count_selector_matches(html: str,
                           selectors: Optional[ReleaseSelectors] = None) -> Dict[str, int]:
    """
    Count how many elements each release selector matches.
    Useful for debugging and verbose mode.

    Args:
        html: HTML content
        selectors: Compiled selectors (compiled on the fly if omitted)

    Returns:
        Dict mapping selector name to match count
    """
    if selectors is None:
        selectors = compile_selectors()

    soup = BeautifulSoup(html, 'lxml')
    return {
        'information': len(selectors.information.select(soup)),
        'date': len(selectors.date.select(soup)),
        'subject': len(selectors.subject.select(soup)),
        'theme': len(selectors.theme.select(soup)),
        'script': len(selectors.script.select(soup))
    }
