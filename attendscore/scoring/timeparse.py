"""
Check-in time parsing.

Time-clock exports are loosely formatted: "7:05", "07:05", "7:05 PM",
"7:05pm", "19:05:12". Parsing never raises; a value that cannot be read
comes back as ParseFailure so the caller decides how to score it.
"""

from __future__ import annotations

import re

from pydantic import BaseModel

_ws_re = re.compile(r"\s+")
_marker_re = re.compile(r"(am|pm)", re.IGNORECASE)
_leading_int_re = re.compile(r"\d+")


class ParsedTime(BaseModel):
    model_config = {"frozen": True}

    hour: int
    minute: int

    @property
    def minutes(self) -> int:
        """Minutes since midnight."""
        return self.hour * 60 + self.minute


class ParseFailure(BaseModel):
    model_config = {"frozen": True}

    raw: str | None
    reason: str


ParseResult = ParsedTime | ParseFailure


def _leading_int(part: str) -> int | None:
    match = _leading_int_re.match(part)
    if match is None:
        return None
    return int(match.group())


def parse_check_in(raw: str | None) -> ParseResult:
    """
    Parse a 12- or 24-hour wall-clock string into a ParsedTime.

    A "pm" anywhere in the value marks the afternoon; "am"/"pm" is then
    stripped from the digits. Without any marker the hour is taken as
    24-hour. Seconds and trailing junk after the minute digits are ignored.
    """
    if raw is None:
        return ParseFailure(raw=raw, reason="missing")

    text = str(raw)
    compact = _ws_re.sub("", text)
    if not compact:
        return ParseFailure(raw=text, reason="empty")

    lowered = compact.lower()
    is_pm = "pm" in lowered
    has_marker = is_pm or "am" in lowered
    digits = _marker_re.sub("", compact, count=1)

    parts = digits.split(":")
    if len(parts) < 2:
        return ParseFailure(raw=text, reason="no hour/minute separator")

    hour = _leading_int(parts[0])
    minute = _leading_int(parts[1])
    if hour is None or minute is None:
        return ParseFailure(raw=text, reason="hour or minute is not a number")

    if has_marker:
        if is_pm and hour < 12:
            hour += 12
        elif not is_pm and hour == 12:
            hour = 0

    return ParsedTime(hour=hour, minute=minute)


def parse_clock(value: str) -> ParsedTime:
    """Strict "HH:MM" parser for configuration values. Raises ValueError."""
    result = parse_check_in(value)
    if isinstance(result, ParseFailure):
        raise ValueError(f"Invalid time '{value}': {result.reason}")
    if not (0 <= result.hour < 24 and 0 <= result.minute < 60):
        raise ValueError(f"Invalid time '{value}': out of range")
    return result
