"""
Extractors for release date pages.

This package contains pure, unit-testable extraction functions
for pulling release dates out of release schedule HTML.
"""

from .release_page import (
    ParseConfigurationError,
    ReleaseSelectors,
    compile_selectors,
    count_selector_matches,
    extract_release_dates,
    extract_script_releases,
    extract_static_releases,
    parse_japanese_date
)

__all__ = [
    'ParseConfigurationError',
    'ReleaseSelectors',
    'compile_selectors',
    'count_selector_matches',
    'extract_release_dates',
    'extract_script_releases',
    'extract_static_releases',
    'parse_japanese_date'
]
