"""Field resolution: from captured groups and override templates to field values.

Templates refer to capture groups with the placeholders ``$1`` to ``$9``.
Each placeholder is replaced at its first occurrence only. When a placeholder
is replaced by an empty value, one space next to it is dropped as well so that
e.g. ``"HTC $1"`` does not resolve to ``"HTC "``; see
:func:`collapse_placeholder` for the exact rule.

All the functions in this module are pure.
"""

from collections.abc import Callable, Sequence

PLACEHOLDERS = tuple(f"${n}" for n in range(1, 10))

Groups = Sequence[str]
Substitution = Callable[[str, Groups], str]


def group(groups: Groups, n: int) -> str:
    """Value of capture group ``n``, empty if the pattern has no such group."""
    return groups[n] if 0 <= n < len(groups) else ""


def _removal(template: str, loc: int, length: int) -> tuple[int, int]:
    end = loc + length
    if loc > 0 and template[loc - 1] == " ":
        if end >= len(template) or template[end] == " ":
            return loc - 1, end
    elif loc == 0 and template[end : end + 1] == " ":
        return loc, end + 1
    return loc, end


def collapse_placeholder(template: str, loc: int, length: int = 2) -> str:
    """Remove the placeholder at ``loc`` in place of an empty substitution.

    A space preceding the placeholder goes with it when the placeholder is
    followed by a space or ends the template. A placeholder opening the
    template takes the space following it instead. Only the single character
    on either side is looked at, so runs of spaces are left alone.
    """
    start, end = _removal(template, loc, length)
    return template[:start] + template[end:]


def replace_placeholder(template: str, token: str, value: str) -> str:
    """Replace the first occurrence of ``token`` in ``template`` by ``value``."""
    loc = template.find(token)
    if loc == -1:
        return template
    if not value:
        return collapse_placeholder(template, loc, len(token))
    return template[:loc] + value + template[loc + len(token) :]


def trim_trailing(value: str) -> str:
    return value.rstrip(" ")


def substitute_first(template: str, groups: Groups) -> str:
    """``$1`` only, always with group 1."""
    return replace_placeholder(template, "$1", group(groups, 1))


def substitute_all(template: str, groups: Groups) -> str:
    """Every placeholder from ``$1`` to ``$9``, then trailing spaces trimmed.

    Text coming from a capture group is never searched for later
    placeholders, so a ``$2`` inside the value of group 1 stays as is.
    """
    text = template
    # spans of text inserted from capture groups
    spans: list[tuple[int, int]] = []
    for n, token in enumerate(PLACEHOLDERS, 1):
        loc = _find(text, token, spans)
        if loc == -1:
            continue
        value = group(groups, n)
        if value:
            start, end = loc, loc + len(token)
        else:
            start, end = _removal(text, loc, len(token))
        text = text[:start] + value + text[end:]
        spans = _shift(spans, start, end, len(value))
        if value:
            spans.append((start, start + len(value)))
    return trim_trailing(text)


def _find(text: str, token: str, spans: list[tuple[int, int]]) -> int:
    loc = text.find(token)
    while loc != -1 and any(s < loc + len(token) and loc < e for s, e in spans):
        loc = text.find(token, loc + 1)
    return loc


def _shift(
    spans: list[tuple[int, int]], start: int, end: int, inserted: int
) -> list[tuple[int, int]]:
    delta = inserted - (end - start)
    shifted = []
    for s, e in spans:
        if e <= start:
            shifted.append((s, e))
        elif s >= end:
            shifted.append((s + delta, e + delta))
        else:
            # only a collapsed space can overlap an inserted value
            if s < start:
                shifted.append((s, start))
            if e > end:
                shifted.append((end + delta, e + delta))
    return shifted


def resolve_field(
    template: str | None,
    groups: Groups,
    index: int,
    substitute: Substitution | None = None,
) -> str:
    """Value of the field mapped to capture group ``index``.

    Without a template the captured group is used as is, provided the pattern
    has that group. Otherwise the template (empty when missing) goes through
    ``substitute`` if the field substitutes placeholders, and is used verbatim
    if it does not.
    """
    if template is None and index < len(groups):
        return groups[index]
    value = template or ""
    if substitute is None:
        return value
    return substitute(value, groups)
