"""
Release date data models.

Defines the JSON structure emitted by the parse command:
    {"title": "...", "date": "2024-12-25"}
An undetermined date is written as the literal "未定".
"""

from __future__ import annotations

import datetime as dt
import json
from typing import Any, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationInfo, field_serializer, field_validator

DATE_FORMAT = "%Y-%m-%d"
UNDETERMINED = "未定"


class ReleaseDate(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    date: Optional[dt.date]

    @classmethod
    def with_date(cls, title: str, release_date: dt.date) -> ReleaseDate:
        return cls(title=title, date=release_date)

    @classmethod
    def undetermined(cls, title: str) -> ReleaseDate:
        return cls(title=title, date=None)

    @property
    def is_undetermined(self) -> bool:
        return self.date is None

    @field_validator("title")
    @classmethod
    def _check_title(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be empty")
        return value

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any, info: ValidationInfo) -> Optional[dt.date]:
        # JSON input must use one of the two string forms
        if info.mode == "python" and (value is None or isinstance(value, dt.date)):
            return value
        if not isinstance(value, str):
            raise ValueError(f"date must be a string, got {type(value).__name__}")
        if value == UNDETERMINED:
            return None
        try:
            return dt.datetime.strptime(value, DATE_FORMAT).date()
        except ValueError as e:
            raise ValueError(f"invalid date format: {value!r}") from e

    @field_serializer("date")
    def _serialize_date(self, value: Optional[dt.date]) -> str:
        if value is None:
            return UNDETERMINED
        return value.isoformat()


_release_list = TypeAdapter(List[ReleaseDate])


def dump_releases(releases: Iterable[ReleaseDate]) -> str:
    """Serialize releases as a pretty-printed JSON array."""
    data = [release.model_dump(mode="json") for release in releases]
    return json.dumps(data, ensure_ascii=False, indent=2)


def load_releases(text: str) -> List[ReleaseDate]:
    """
    Parse a JSON array written by dump_releases.

    Raises:
        pydantic.ValidationError: If a record or date is malformed
    """
    return _release_list.validate_json(text)
