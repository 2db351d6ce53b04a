"""
Error types shared by the substitution pipeline and the scheduler.
"""

from __future__ import annotations


class XenolexiaError(Exception):
    """Base class for recoverable library errors."""


class UnsupportedLanguagePairError(XenolexiaError):
    """No dictionary data exists for the requested language pair."""

    def __init__(self, source_language: str, target_language: str):
        self.source_language = str(source_language)
        self.target_language = str(target_language)
        super().__init__(
            f"No dictionary data for language pair "
            f"{self.source_language} -> {self.target_language}"
        )


class InvalidRangeError(ValueError):
    """A token or substitution range does not fit the document it refers to."""


class InvalidQualityError(ValueError):
    """A review quality score outside 0-5."""
