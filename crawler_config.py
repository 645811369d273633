"""
Configuration settings for the release date crawler.

Runtime settings come from environment variables; HTTP settings are
plain module constants.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

# Request timeout in seconds
REQUEST_TIMEOUT = 30

# Browser fingerprint used by curl_cffi
IMPERSONATE = "chrome120"

DEFAULT_AWS_REGION = "ap-northeast-1"
DEFAULT_DYNAMODB_TABLE = "rrdc-releases"


class ConfigError(ValueError):
    """A required environment variable is missing."""


def _require(environ: Mapping[str, str], name: str) -> str:
    value = environ.get(name)
    if value is None:
        raise ConfigError(f"{name} is required")
    return value


@dataclass
class Config:
    """Environment configuration for the crawler and its sync targets."""
    target_url: str
    google_calendar_id: str
    aws_region: str = DEFAULT_AWS_REGION
    dynamodb_table: str = DEFAULT_DYNAMODB_TABLE
    dynamodb_endpoint: Optional[str] = None
    google_credentials_file: Optional[str] = None
    google_credentials_base64: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Config':
        """
        Build a Config from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Config instance

        Raises:
            ConfigError: If TARGET_URL or GOOGLE_CALENDAR_ID is missing
        """
        if environ is None:
            environ = os.environ

        return cls(
            target_url=_require(environ, 'TARGET_URL'),
            google_calendar_id=_require(environ, 'GOOGLE_CALENDAR_ID'),
            aws_region=environ.get('AWS_REGION', DEFAULT_AWS_REGION),
            dynamodb_table=environ.get('DYNAMODB_TABLE', DEFAULT_DYNAMODB_TABLE),
            # An empty endpoint means "use the AWS default"
            dynamodb_endpoint=environ.get('DYNAMODB_ENDPOINT') or None,
            google_credentials_file=environ.get('GOOGLE_CREDENTIALS_FILE'),
            google_credentials_base64=environ.get('GOOGLE_CREDENTIALS_BASE64')
        )
