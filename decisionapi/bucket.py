"""Encoding and decoding of bucket range strings such as ``"0-20:40-60"``."""

from __future__ import annotations

import re

MASTER_BUCKET_RANGE = "0-100"
ZERO_BUCKET_RANGE = "0-0"

_FLOAT_PATTERN = re.compile(
    r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|[+-]?(?:inf|infinity|nan)",
    re.IGNORECASE,
)


def _format_number(value: float) -> str:
    """Format a float in its shortest form, without a trailing ``.0``."""
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def _parse_number(text: str) -> float:
    """Parse a float, falling back to 0 when the text is not a number."""
    if not _FLOAT_PATTERN.fullmatch(text):
        return 0.0
    return float(text)


def encode_bucket_range_string(buckets_list: list[str], bucket_range_ids: list[str]) -> str:
    """Return the ranges, in percent, covered by ``bucket_range_ids`` within ``buckets_list``.

    An empty bucket list covers everything; an empty selection covers nothing.
    """
    if not buckets_list:
        return MASTER_BUCKET_RANGE
    if not bucket_range_ids:
        return ZERO_BUCKET_RANGE

    count = len(buckets_list)
    ranges = []
    for wanted in bucket_range_ids:
        for position, bucket in enumerate(buckets_list):
            if bucket == wanted:
                start = position / count * 100
                end = (position + 1) / count * 100
                ranges.append(f"{_format_number(start)}-{_format_number(end)}")
    return ":".join(ranges)


def decode_bucket_range_string(bucket_string: str) -> list[tuple[float, float]]:
    """Decode a bucket range string into ``(start, end)`` pairs.

    Malformed ranges are skipped; when none remain the full range is returned.
    """
    ranges = []
    for bucket_range in bucket_string.split(":"):
        bounds = bucket_range.split("-")
        if len(bounds) != 2:
            continue
        ranges.append((_parse_number(bounds[0]), _parse_number(bounds[1])))
    if not ranges:
        ranges.append((0.0, 100.0))
    return ranges