"""A point in time that reads from RFC 3339 strings or Unix seconds."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

_ZERO = datetime(1, 1, 1, tzinfo=timezone.utc)
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_UNIX = re.compile(r"[+-]?\d+\Z")
_RFC3339 = re.compile(
    r'"(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})"\Z'
)


def _offset_text(offset: timedelta, colon: bool) -> str:
    minutes = int(offset.total_seconds()) // 60
    sign = "-" if minutes < 0 else "+"
    hours, mins = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}:{mins:02d}" if colon else f"{sign}{hours:02d}{mins:02d}"


class Timestamp:
    """A timezone-aware time; naive times are taken as UTC."""

    _stringify_braced = True

    def __init__(self, time: datetime | None = None):
        if time is None:
            time = _ZERO
        elif time.tzinfo is None:
            time = time.replace(tzinfo=timezone.utc)
        self.time = time

    @classmethod
    def from_json(cls, data: str | bytes) -> "Timestamp":
        """Parse raw JSON text: an integer of Unix seconds or a quoted RFC 3339 string."""
        text = data.decode() if isinstance(data, (bytes, bytearray)) else data
        if _UNIX.match(text):
            return cls(_EPOCH + timedelta(seconds=int(text)))
        match = _RFC3339.match(text)
        if not match:
            raise ValueError(f"cannot parse {text!r} as a timestamp")
        year, month, day, hour, minute, second, frac, zone = match.groups()
        micro = int((frac or "").ljust(6, "0")[:6])
        if zone in ("Z", "z"):
            tz = timezone.utc
        else:
            sign = -1 if zone[0] == "-" else 1
            tz = timezone(sign * timedelta(hours=int(zone[1:3]), minutes=int(zone[4:6])))
        return cls(datetime(int(year), int(month), int(day), int(hour), int(minute), int(second), micro, tzinfo=tz))

    def _clock(self) -> str:
        t = self.time
        frac = f".{t.microsecond:06d}".rstrip("0") if t.microsecond else ""
        return f"{t.year:04d}-{t.month:02d}-{t.day:02d}", f"{t.hour:02d}:{t.minute:02d}:{t.second:02d}{frac}"

    def to_json(self) -> str:
        """Encode as a quoted RFC 3339 string."""
        date, clock = self._clock()
        offset = self.time.utcoffset()
        zone = "Z" if not offset else _offset_text(offset, colon=True)
        return f'"{date}T{clock}{zone}"'

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self.time == other.time

    def __hash__(self) -> int:
        return hash(self.time)

    def __str__(self) -> str:
        date, clock = self._clock()
        offset = self.time.utcoffset() or timedelta(0)
        numeric = _offset_text(offset, colon=False)
        name = "UTC" if not offset else numeric
        return f"{date} {clock} {numeric} {name}"

    def __repr__(self) -> str:
        return f"Timestamp({self.time!r})"