"""Language utilities for the content API.

The API models the language as a GraphQL enum with two members. Keeping the
enum in the domain layer lets the query builders, the CLI and the settings
share a single source of truth.
"""

from __future__ import annotations

from enum import Enum

from core.errors import ValidationError


class Language(str, Enum):
    """Languages served by the content API."""

    SWEDISH = "sv"
    ENGLISH = "en"

    @classmethod
    def default(cls) -> "Language":
        """Return the default language of the API."""

        return cls.SWEDISH

    @classmethod
    def parse(cls, value: "str | Language") -> "Language":
        """Parse a language code case-insensitively.

        Raises `ValidationError` for anything other than `en`/`sv`.
        """

        if isinstance(value, Language):
            return value
        code = str(value).strip().lower()
        for member in cls:
            if member.value == code:
                return member
        raise ValidationError('Language must be either "en" or "sv"')

    def label(self) -> str:
        """Human readable label for prompts and logging."""

        return "Swedish" if self is Language.SWEDISH else "English"
