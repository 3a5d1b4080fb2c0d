"""Stateless value-to-string conversions shared by renderers.

Why
---
The console adapter and external renderers (tables, boxes, progress output)
need the same timestamp, number and JSON conventions. Keeping them as pure
functions in one module keeps every renderer in sync.

Contents
--------
* :func:`timestamp` – token-based date/time formatting.
* :func:`number`, :func:`duration`, :func:`byte_size`, :func:`percentage`.
* :func:`json_text` / :func:`json` – deterministic, optionally highlighted JSON.
* :func:`wrap`, :func:`truncate`, :func:`pad` – ANSI-aware text layout.
* :func:`relative_time` – human phrasing for time distances.

System Role
-----------
Consumed by :class:`~lib_console_styler.adapters.console.rich_console.RichConsoleAdapter`
for timestamps and metadata blocks.
"""

from __future__ import annotations

import io
import json as _json
import math
import re
from collections.abc import Mapping
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Literal

from rich.cells import cell_len
from rich.console import Console
from rich.text import Text

_TIMESTAMP_TOKENS = re.compile(r"YYYY|SSS|MM|DD|HH|mm|ss")

JSON_STYLES: Mapping[str, str] = {
    "punctuation": "bright_black",
    "literal": "magenta",
    "number": "yellow",
    "string": "green",
    "key": "cyan",
}
"""Theme-neutral styles used when JSON output is highlighted."""

_JSON_PUNCTUATION = re.compile(r"[{}\[\],:]")
_JSON_LITERAL = re.compile(r"\b(?:true|false|null)\b")
_JSON_NUMBER = re.compile(r"(?<![\w.\"])-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?(?![\w\"])")
_JSON_STRING = re.compile(r'"(?:[^"\\]|\\.)*"')
_JSON_KEY = re.compile(r'"(?:[^"\\]|\\.)*"(?=\s*:)')


def timestamp(instant: datetime, pattern: str = "HH:mm:ss") -> str:
    """Format ``instant`` using ``YYYY MM DD HH mm ss SSS`` tokens.

    Unrecognised text passes through literally. The instant's own fields are
    used; convert to local time beforehand when needed.

    Examples
    --------
    >>> moment = datetime(2025, 3, 7, 9, 5, 2, 45000)
    >>> timestamp(moment, "YYYY-MM-DD HH:mm:ss.SSS")
    '2025-03-07 09:05:02.045'
    >>> timestamp(moment, "at HH:mm")
    'at 09:05'
    """

    values = {
        "YYYY": f"{instant.year:04d}",
        "MM": f"{instant.month:02d}",
        "DD": f"{instant.day:02d}",
        "HH": f"{instant.hour:02d}",
        "mm": f"{instant.minute:02d}",
        "ss": f"{instant.second:02d}",
        "SSS": f"{instant.microsecond // 1000:03d}",
    }
    return _TIMESTAMP_TOKENS.sub(lambda match: values[match.group(0)], pattern)


def number(value: int | float) -> str:
    """Return ``value`` with thousands separators.

    Examples
    --------
    >>> number(1234567)
    '1,234,567'
    >>> number(1234.5678)
    '1,234.568'
    >>> number(-2000.0)
    '-2,000'
    """

    if isinstance(value, int):
        return f"{value:,}"
    if math.isfinite(value) and value.is_integer():
        return f"{int(value):,}"
    if not math.isfinite(value):
        return str(value)
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def duration(milliseconds: float) -> str:
    """Return a single-unit human duration (ms, s, m or h).

    Examples
    --------
    >>> duration(250)
    '250ms'
    >>> duration(1500)
    '1.5s'
    >>> duration(90_000)
    '1.5m'
    >>> duration(5_400_000)
    '1.5h'
    >>> duration(999.6), duration(59_960)
    ('1.0s', '1.0m')
    """

    # Pick the unit from the rounded value.
    magnitude = abs(milliseconds)
    if round(magnitude) < 1000:
        return f"{milliseconds:.0f}ms"
    if round(magnitude / 1000, 1) < 60:
        return f"{milliseconds / 1000:.1f}s"
    if round(magnitude / 60_000, 1) < 60:
        return f"{milliseconds / 60_000:.1f}m"
    return f"{milliseconds / 3_600_000:.1f}h"


_BYTE_UNITS = ("B", "KiB", "MiB", "GiB", "TiB", "PiB")


def byte_size(size: int | float) -> str:
    """Return ``size`` using binary prefixes with two decimals.

    Examples
    --------
    >>> byte_size(0)
    '0 B'
    >>> byte_size(512)
    '512 B'
    >>> byte_size(1536)
    '1.50 KiB'
    >>> byte_size(5 * 1024 ** 3)
    '5.00 GiB'
    """

    magnitude = abs(size)
    if magnitude < 1024:
        return f"{size:.0f} B"
    exponent = min(int(math.log(magnitude, 1024)), len(_BYTE_UNITS) - 1)
    scaled = size / (1024**exponent)
    if abs(scaled) >= 1024 and exponent < len(_BYTE_UNITS) - 1:
        exponent += 1
        scaled = size / (1024**exponent)
    return f"{scaled:.2f} {_BYTE_UNITS[exponent]}"


def percentage(fraction: float) -> str:
    """Return ``fraction`` (0..1) as a percentage with one decimal.

    Examples
    --------
    >>> percentage(0.4567)
    '45.7%'
    >>> percentage(1)
    '100.0%'
    """

    return f"{fraction * 100:.1f}%"


def _json_default(value: Any) -> Any:
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=repr)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _dumps(value: Any, indent: int | None) -> str:
    return _json.dumps(value, indent=indent, ensure_ascii=False, default=_json_default)


def json_text(value: Any, indent: int | None = 2) -> Text:
    """Return ``value`` as JSON inside a Rich :class:`~rich.text.Text` with highlight spans.

    Key order follows the insertion order of the input mapping. Raises
    :class:`TypeError` for values JSON cannot represent.
    """

    text = Text(_dumps(value, indent))
    text.highlight_regex(_JSON_PUNCTUATION, JSON_STYLES["punctuation"])
    text.highlight_regex(_JSON_LITERAL, JSON_STYLES["literal"])
    text.highlight_regex(_JSON_NUMBER, JSON_STYLES["number"])
    text.highlight_regex(_JSON_STRING, JSON_STYLES["string"])
    text.highlight_regex(_JSON_KEY, JSON_STYLES["key"])
    return text


def json(value: Any, indent: int | None = 2, colorize: bool = False) -> str:
    """Return ``value`` as JSON, wrapped in ANSI style codes when ``colorize``.

    Examples
    --------
    >>> print(json({"b": 1, "a": [True, None]}, indent=None))
    {"b": 1, "a": [true, null]}
    >>> "\\x1b[" in json({"a": 1}, colorize=True)
    True
    """

    if not colorize:
        return _dumps(value, indent)
    return to_ansi(json_text(value, indent))


def to_ansi(text: Text) -> str:
    """Render a Rich :class:`~rich.text.Text` into a string with ANSI codes."""

    console = Console(
        file=io.StringIO(),
        force_terminal=True,
        color_system="standard",
        no_color=False,
        highlight=False,
        soft_wrap=True,
        width=max(cell_len(text.plain) + 1, 80),
    )
    with console.capture() as capture:
        console.print(text, end="")
    return capture.get()


def visible_length(text: str) -> int:
    """Return the terminal cell width of ``text`` ignoring ANSI codes.

    Examples
    --------
    >>> visible_length("\\x1b[31mred\\x1b[0m")
    3
    """

    return cell_len(Text.from_ansi(text).plain)


def wrap(text: str, width: int) -> list[str]:
    """Greedy word wrap; words longer than ``width`` stay whole on their own line.

    Examples
    --------
    >>> wrap("the quick brown fox", 10)
    ['the quick', 'brown fox']
    >>> wrap("a supercalifragilistic word", 8)
    ['a', 'supercalifragilistic', 'word']
    >>> wrap("", 10)
    []
    """

    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if visible_length(candidate) > width:
            if current:
                lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


def truncate(text: str, max_length: int, ellipsis: str = "...") -> str:
    """Shorten ``text`` to ``max_length`` visible characters ending in ``ellipsis``.

    Truncated results are returned without ANSI codes.

    Examples
    --------
    >>> truncate("console styler", 10)
    'console...'
    >>> truncate("short", 10)
    'short'
    """

    plain = Text.from_ansi(text).plain
    if cell_len(plain) <= max_length:
        return text
    if max_length <= len(ellipsis):
        return ellipsis[:max_length]
    return plain[: max_length - len(ellipsis)] + ellipsis


def pad(text: str, width: int, align: Literal["left", "center", "right"] = "left") -> str:
    """Pad ``text`` with spaces to ``width`` visible cells.

    Examples
    --------
    >>> pad("ab", 5, "right")
    '   ab'
    >>> pad("ab", 6, "center")
    '  ab  '
    """

    padding = width - visible_length(text)
    if padding <= 0:
        return text
    if align == "right":
        return " " * padding + text
    if align == "center":
        left = padding // 2
        return " " * left + text + " " * (padding - left)
    return text + " " * padding


_RELATIVE_UNITS = (
    ("year", 31_536_000),
    ("month", 2_592_000),
    ("day", 86_400),
    ("hour", 3_600),
    ("minute", 60),
    ("second", 1),
)


def relative_time(instant: datetime, now: datetime | None = None) -> str:
    """Describe the distance between ``instant`` and ``now`` in words.

    Examples
    --------
    >>> base = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)
    >>> relative_time(datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc), base)
    '3 hours ago'
    >>> relative_time(datetime(2025, 1, 1, 12, 1, tzinfo=timezone.utc), base)
    'in 1 minute'
    >>> relative_time(base, base)
    'now'
    """

    reference = now if now is not None else datetime.now(instant.tzinfo)
    delta = (instant - reference).total_seconds()
    magnitude = abs(delta)
    if magnitude < 1:
        return "now"
    for unit, seconds in _RELATIVE_UNITS:
        if magnitude >= seconds:
            count = int(round(magnitude / seconds))
            label = unit if count == 1 else f"{unit}s"
            return f"in {count} {label}" if delta > 0 else f"{count} {label} ago"
    return "now"


__all__ = [
    "JSON_STYLES",
    "byte_size",
    "duration",
    "json",
    "json_text",
    "number",
    "pad",
    "percentage",
    "relative_time",
    "timestamp",
    "to_ansi",
    "truncate",
    "visible_length",
    "wrap",
]
