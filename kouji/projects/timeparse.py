"""
Flexible timestamp parsing.

Folder names and hand-edited store files carry dates in many shapes
("2025-0114", "2025/1/4", "20250114", full RFC 3339 ...). Every supported
shape is a *layout* written with strftime-style tokens; each layout is
compiled once into a regex whose groups have the exact digit width of the
token, so a date can be found anywhere inside a longer string:

    >>> instant, rest = parse_timestamp_and_rest("Acme 2025-01-14 Factory")
    >>> rest
    'Acme Factory'

Layouts are tried in a fixed priority order (offset-qualified first, then
naive layouts read in the local timezone); the first layout whose match
forms a real calendar date wins.
"""

import re
from functools import lru_cache
from typing import Dict, List, NamedTuple, Optional, Pattern, Tuple

from kouji.core import get_logger
from kouji.projects.instant import Instant

logger = get_logger("kouji.projects.timeparse")

FRACTION_DIGITS = 9

# Layout token -> regex. "%-m" / "%-d" are the single-digit variants.
_TOKEN_PATTERNS: Dict[str, str] = {
    "%Y": r"(?P<year>\d{4})",
    "%m": r"(?P<month>\d{2})",
    "%-m": r"(?P<month>\d{1,2})",
    "%d": r"(?P<day>\d{2})",
    "%-d": r"(?P<day>\d{1,2})",
    "%H": r"(?P<hour>\d{2})",
    "%M": r"(?P<minute>\d{2})",
    "%S": r"(?P<second>\d{2})",
    "%f": r"(?P<fraction>\d+)",
    "%z": r"(?P<offset>Z|[+-]\d{2}(?::?\d{2})?)",
}

_TOKEN_RE = re.compile(r"%-?[A-Za-z]")


class UnparseableTimestamp(ValueError):
    """No supported layout could be found in the input string."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"unable to parse date/time in the string: {text!r}")


class TimestampFormat(NamedTuple):
    name: str
    layout: str
    example: str
    pattern: Pattern

    @property
    def has_timezone(self) -> bool:
        return "%z" in self.layout


# (name, layout, example) in priority order.
_FORMATS_WITH_TZ: Tuple[Tuple[str, str, str], ...] = (
    ("RFC3339Nano", "%Y-%m-%dT%H:%M:%S.%f%z", "2025-01-14T15:30:45.123456789+09:00"),
    ("RFC3339", "%Y-%m-%dT%H:%M:%S%z", "2025-01-14T15:30:45+09:00"),
)

_FORMATS_WITHOUT_TZ: Tuple[Tuple[str, str, str], ...] = (
    ("ISO8601Nano", "%Y-%m-%dT%H:%M:%S.%f", "2025-01-14T15:30:45.123456789"),
    ("ISO8601", "%Y-%m-%dT%H:%M:%S", "2025-01-14T15:30:45"),
    ("DateTime", "%Y-%m-%d %H:%M:%S", "2025-01-14 15:30:45"),
    ("Date", "%Y-%m-%d", "2025-01-14"),
    ("DateShort", "%Y-%-m-%-d", "2025-1-4"),
    ("YearMonthDay", "%Y-%m%d", "2025-0114"),
    ("CompactDate", "%Y%m%d", "20250114"),
    ("SlashDate", "%Y/%m/%d", "2025/01/14"),
    ("SlashDateShort", "%Y/%-m/%-d", "2025/1/4"),
    ("DotDate", "%Y.%m.%d", "2025.01.14"),
    ("DotDateShort", "%Y.%-m.%-d", "2025.1.4"),
)


def compile_layout(layout: str) -> Pattern:
    """
    Turn a layout into a search pattern.

    Literal characters are escaped; tokens become digit classes of their
    exact width. Unknown tokens raise KeyError.
    """
    parts: List[str] = []
    pos = 0
    for token in _TOKEN_RE.finditer(layout):
        parts.append(re.escape(layout[pos:token.start()]))
        parts.append(_TOKEN_PATTERNS[token.group()])
        pos = token.end()
    parts.append(re.escape(layout[pos:]))
    return re.compile("".join(parts))


@lru_cache(maxsize=None)
def timestamp_formats() -> Tuple[TimestampFormat, ...]:
    """The format table, compiled on first use."""
    return tuple(
        TimestampFormat(name, layout, example, compile_layout(layout))
        for name, layout, example in _FORMATS_WITH_TZ + _FORMATS_WITHOUT_TZ
    )


def supported_formats() -> List[Dict[str, str]]:
    """Format table as plain dicts (CLI / API listing)."""
    return [
        {
            "name": fmt.name,
            "layout": fmt.layout,
            "example": fmt.example,
            "timezone": "explicit" if fmt.has_timezone else "local",
        }
        for fmt in timestamp_formats()
    ]


# ---------------------------------------------------------------------------
# Field conversion
# ---------------------------------------------------------------------------


def fraction_to_nanos(fraction: Optional[str]) -> int:
    """Pad a fractional-second digit string to 9 digits, or cut it to 9 (no rounding)."""
    if not fraction:
        return 0
    return int(fraction[:FRACTION_DIGITS].ljust(FRACTION_DIGITS, "0"))


def offset_to_seconds(text: str) -> int:
    """``Z``, ``±HH:MM``, ``±HHMM`` or ``±HH`` -> seconds east of UTC."""
    if text == "Z":
        return 0
    sign = -1 if text[0] == "-" else 1
    digits = text[1:].replace(":", "")
    hours = int(digits[:2])
    minutes = int(digits[2:4]) if len(digits) > 2 else 0
    return sign * (hours * 3600 + minutes * 60)


def _instant_from_match(match) -> Instant:
    fields = match.groupdict()
    offset = fields.get("offset")
    return Instant.from_wall(
        int(fields["year"]),
        int(fields["month"]),
        int(fields["day"]),
        int(fields.get("hour") or 0),
        int(fields.get("minute") or 0),
        int(fields.get("second") or 0),
        nanos=fraction_to_nanos(fields.get("fraction")),
        offset=offset_to_seconds(offset) if offset else None,
    )


def _rest(text: str, start: int, end: int) -> str:
    prefix = text[:start].strip()
    suffix = text[end:].strip()
    if prefix and suffix:
        return prefix + " " + suffix
    return prefix + suffix


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_timestamp_and_rest(text: str) -> Tuple[Instant, str]:
    """
    Find the first supported date/time inside ``text``.

    Returns:
        (instant, rest) where rest is ``text`` without the matched substring,
        the text on either side trimmed and joined by a single space.

    Raises:
        UnparseableTimestamp: no layout produced a valid date/time.
    """
    for fmt in timestamp_formats():
        match = fmt.pattern.search(text)
        if match is None:
            continue
        try:
            instant = _instant_from_match(match)
        except ValueError as exc:
            logger.debug("%s matched %r but is not a real date: %s", fmt.name, match.group(), exc)
            continue
        return instant, _rest(text, match.start(), match.end())

    raise UnparseableTimestamp(text)


def parse_timestamp(text: str) -> Instant:
    """Parse a date/time string into an Instant (see parse_timestamp_and_rest)."""
    instant, _ = parse_timestamp_and_rest(text)
    return instant
