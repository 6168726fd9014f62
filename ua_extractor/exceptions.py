"""Exceptions raised while building parsers from rules."""


class UAExtractorError(Exception):
    """Base exception for ua_extractor."""


class InvalidRuleError(UAExtractorError, ValueError):
    """A rule's pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"invalid rule pattern {pattern!r}: {reason}")
        self.pattern = pattern


class RuleFileError(UAExtractorError):
    """The rule file does not have the shape of a regexes.yaml document."""
