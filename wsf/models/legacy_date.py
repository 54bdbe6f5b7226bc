"""
Legacy ASP.NET JSON date handling for the WSF API.

The WSF API emits timestamps in the legacy ASP.NET JSON form
``"\\/Date(1461456000000-0700)\\/"`` rather than RFC 3339. This module
decodes those tokens into an absolute instant with millisecond precision.
"""

import json
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Union

JSON_NULL = "null"
TOKEN_PREFIX = '"\\/Date('
TOKEN_SUFFIX = ')\\/"'
OFFSET_SEPARATOR = "-"

NANOSECONDS_PER_MILLISECOND = 1_000_000
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


class MalformedTimestamp(ValueError):
    """Raised when a legacy date token cannot be decoded."""

    pass


@dataclass(frozen=True)
class WSFTime:
    """
    Immutable absolute instant decoded from the WSF API.

    ``nanoseconds`` counts nanoseconds since the Unix epoch. ``None`` is the
    zero/unset value produced by a JSON ``null``; it is distinct from the
    epoch itself.
    """

    nanoseconds: Optional[int] = None

    @property
    def is_zero(self) -> bool:
        """Check if this is the unset instant."""
        return self.nanoseconds is None

    @property
    def milliseconds(self) -> Optional[int]:
        """Get the instant as whole milliseconds since the epoch."""
        if self.nanoseconds is None:
            return None
        return self.nanoseconds // NANOSECONDS_PER_MILLISECOND

    def to_datetime(self) -> Optional[datetime]:
        """
        Convert to an aware UTC datetime.

        Returns:
            Optional[datetime]: The instant, or None for the unset value

        Raises:
            MalformedTimestamp: If the instant is outside the datetime range
        """
        if self.nanoseconds is None:
            return None
        try:
            return EPOCH + timedelta(microseconds=self.nanoseconds // 1000)
        except OverflowError as e:
            raise MalformedTimestamp(
                f"ASP.NET time {self.milliseconds}ms is outside the representable range"
            ) from e

    def to_json_value(self) -> Optional[str]:
        """Get the decoded JSON form (``/Date(<ms>)/``) or None when unset."""
        if self.nanoseconds is None:
            return None
        return f"/Date({self.milliseconds})/"

    @classmethod
    def from_milliseconds(cls, milliseconds: int) -> "WSFTime":
        """
        Create an instant from milliseconds since the epoch.

        Raises:
            MalformedTimestamp: For instants before the epoch, which have no
                decodable ``/Date(<ms>)/`` form
        """
        if milliseconds < 0:
            raise MalformedTimestamp(
                f"ASP.NET time {milliseconds}ms is before the Unix epoch"
            )
        return cls(nanoseconds=milliseconds * NANOSECONDS_PER_MILLISECOND)

    @classmethod
    def from_datetime(cls, value: datetime) -> "WSFTime":
        """Create an instant from a datetime; naive values are taken as UTC."""
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        microseconds = (value - EPOCH) // timedelta(microseconds=1)
        if microseconds < 0:
            raise MalformedTimestamp(
                f"ASP.NET time {value.isoformat()} is before the Unix epoch"
            )
        return cls(nanoseconds=microseconds * 1000)

    def __str__(self) -> str:
        if self.nanoseconds is None:
            return "unset"
        try:
            return self.to_datetime().isoformat()
        except MalformedTimestamp:
            return f"{self.milliseconds}ms"


UNSET = WSFTime()


def decode_legacy_date(raw: Union[str, bytes]) -> WSFTime:
    """
    Decode a raw JSON token holding a legacy ASP.NET date.

    Args:
        raw: The JSON value as it appears on the wire, quotes and escaped
            slashes included, e.g. ``"\\/Date(1461456000000-0700)\\/"``

    Returns:
        WSFTime: The decoded instant, or UNSET for JSON null

    Raises:
        MalformedTimestamp: If the token has too many separators or the
            epoch segment is not an integer
    """
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedTimestamp(f"ASP.NET time is not valid UTF-8: {e}") from e

    # Null leaves the value unset, like the standard JSON decoder does
    if raw == JSON_NULL:
        return UNSET

    truncated = _trim_suffix(_trim_prefix(raw, TOKEN_PREFIX), TOKEN_SUFFIX)

    # Epoch milliseconds, then the timezone offset (ignored)
    segments = truncated.split(OFFSET_SEPARATOR)
    if len(segments) > 2:
        raise MalformedTimestamp(
            f"ASP.NET time {raw!r} has too many separators"
        )

    milliseconds = _parse_int64(segments[0])
    return WSFTime.from_milliseconds(milliseconds)


def parse_legacy_date(value: Any) -> WSFTime:
    """
    Decode a legacy date that has already been through a JSON decoder.

    ``json.loads`` turns ``"\\/Date(1)\\/"`` into ``/Date(1)/``; this
    re-encodes such a value to its wire token before decoding it. Other JSON
    values are re-encoded as-is, so a bare number decodes as milliseconds.
    """
    if value is None:
        return UNSET
    if isinstance(value, str):
        return decode_legacy_date(json.dumps(value).replace("/", "\\/"))
    try:
        raw = json.dumps(value)
    except (TypeError, ValueError) as e:
        raise MalformedTimestamp(
            f"ASP.NET time must be a JSON value, got {type(value).__name__}"
        ) from e
    return decode_legacy_date(raw)


def _trim_prefix(value: str, prefix: str) -> str:
    return value[len(prefix):] if value.startswith(prefix) else value


def _trim_suffix(value: str, suffix: str) -> str:
    return value[: -len(suffix)] if value.endswith(suffix) else value


def _parse_int64(segment: str) -> int:
    """Parse a base-10 signed 64-bit integer."""
    try:
        value = int(segment, 10)
    except ValueError as e:
        raise MalformedTimestamp(
            f"ASP.NET time segment {segment!r} is not an integer"
        ) from e

    # int() also accepts whitespace and underscores
    if not _INTEGER_PATTERN.fullmatch(segment):
        raise MalformedTimestamp(f"ASP.NET time segment {segment!r} is not an integer")
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise MalformedTimestamp(
            f"ASP.NET time segment {segment!r} is out of range"
        )
    return value
