"""
Tests for the command line entry point.
"""

import io
import json
import unittest
from pathlib import Path
from unittest import mock

import release_crawler
from http_client import HttpRequestError

FIXTURE = Path(__file__).parent / "fixtures" / "release_page.html"


class TestParseCommand(unittest.TestCase):
    """Test `parse`."""

    def test_parse_stdin(self):
        html = FIXTURE.read_text(encoding='utf-8')

        with mock.patch('sys.stdin', io.StringIO(html)), \
                mock.patch('sys.stdout', new_callable=io.StringIO) as stdout:
            release_crawler.main(['parse'])

        data = json.loads(stdout.getvalue())
        self.assertEqual(len(data), 7)
        self.assertEqual(data[0], {"title": "Winter Figure Holiday Edition", "date": "2024-12-25"})
        self.assertEqual(data[2], {"title": "Spring Figure", "date": "未定"})

    def test_parse_input_file(self):
        with mock.patch('sys.stdout', new_callable=io.StringIO) as stdout:
            release_crawler.main(['parse', '--input', str(FIXTURE), '--verbose-selectors'])

        self.assertEqual(len(json.loads(stdout.getvalue())), 7)

    def test_parse_missing_file(self):
        with self.assertRaises(SystemExit) as ctx:
            release_crawler.main(['parse', '--input', str(FIXTURE.parent / 'missing.html')])

        self.assertEqual(ctx.exception.code, 1)


class TestFetchCommand(unittest.TestCase):
    """Test `fetch`."""

    def test_fetch_prints_html(self):
        with mock.patch.object(release_crawler, 'HttpClient') as client_cls, \
                mock.patch('sys.stdout', new_callable=io.StringIO) as stdout:
            client_cls.return_value.fetch_html.return_value = "<html>ok</html>"
            release_crawler.main(['fetch', '--url', 'https://example.com/'])

        self.assertEqual(stdout.getvalue(), "<html>ok</html>")
        client_cls.return_value.fetch_html.assert_called_once_with('https://example.com/')
        client_cls.return_value.close.assert_called_once()

    def test_fetch_url_from_env(self):
        with mock.patch.dict('os.environ', {'TARGET_URL': 'https://example.com/env'}), \
                mock.patch.object(release_crawler, 'HttpClient') as client_cls, \
                mock.patch('sys.stdout', new_callable=io.StringIO):
            client_cls.return_value.fetch_html.return_value = ""
            release_crawler.main(['fetch'])

        client_cls.return_value.fetch_html.assert_called_once_with('https://example.com/env')

    def test_fetch_without_url(self):
        with mock.patch.dict('os.environ', {}, clear=True):
            with self.assertRaises(SystemExit) as ctx:
                release_crawler.main(['fetch'])

        self.assertEqual(ctx.exception.code, 1)

    def test_fetch_http_error(self):
        with mock.patch.object(release_crawler, 'HttpClient') as client_cls:
            client_cls.return_value.fetch_html.side_effect = HttpRequestError("HTTP 500")
            with self.assertRaises(SystemExit) as ctx:
                release_crawler.main(['fetch', '--url', 'https://example.com/'])

        self.assertEqual(ctx.exception.code, 1)


class TestRunCommand(unittest.TestCase):
    """Test `run`."""

    def test_run_requires_config(self):
        """Missing configuration fails before any fetch."""
        with mock.patch.dict('os.environ', {'TARGET_URL': 'https://example.com/'}, clear=True), \
                mock.patch.object(release_crawler, 'HttpClient') as client_cls:
            with self.assertRaises(SystemExit) as ctx:
                release_crawler.main(['run'])

        self.assertEqual(ctx.exception.code, 1)
        client_cls.assert_not_called()

    def test_run_fetches_and_parses(self):
        environ = {
            'TARGET_URL': 'https://example.com/releases',
            'GOOGLE_CALENDAR_ID': 'calendar@example.com'
        }
        html = FIXTURE.read_text(encoding='utf-8')

        with mock.patch.dict('os.environ', environ, clear=True), \
                mock.patch.object(release_crawler, 'HttpClient') as client_cls, \
                mock.patch('sys.stdout', new_callable=io.StringIO) as stdout:
            client_cls.return_value.fetch_html.return_value = html
            release_crawler.main(['run'])

        client_cls.return_value.fetch_html.assert_called_once_with('https://example.com/releases')
        self.assertEqual(len(json.loads(stdout.getvalue())), 7)


if __name__ == '__main__':
    unittest.main()
