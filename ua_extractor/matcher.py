import re

from .exceptions import InvalidRuleError


class Matcher:
    """A single compiled rule pattern.

    ``search`` returns the captured groups of the leftmost match, whole match
    at index 0, with groups that did not take part in the match as ``""``.
    """

    __slots__ = ("pattern", "regex")

    def __init__(self, pattern: str, case_insensitive: bool = False) -> None:
        self.pattern = pattern
        try:
            self.regex = re.compile(pattern, re.IGNORECASE if case_insensitive else 0)
        except re.error as e:
            raise InvalidRuleError(pattern, str(e)) from e

    @property
    def groups(self) -> int:
        return self.regex.groups

    def search(self, s: str, /) -> tuple[str, ...] | None:
        m = self.regex.search(s)
        if m is None:
            return None
        return (m.group(0), *m.groups(""))

    def __repr__(self) -> str:
        icase = bool(self.regex.flags & re.IGNORECASE)
        return f"Matcher({self.pattern!r}, case_insensitive={icase})"
