"""Numeric token decoders.

Decimals are parsed as plain fixed-point notation first and as scientific
notation second. Special values (``NaN``, ``Infinity``) are never accepted.
"""
from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from ..config.constants import OPTIONAL_FIELD
from ..errors import NumericParseError

_FIXED_POINT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)")
_SCIENTIFIC = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)[eE][+-]?\d+")
_UNSIGNED = re.compile(r"\+?\d+")
_SIGNED = re.compile(r"[+-]?\d+")

U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1
I32_MIN, I32_MAX = -(2**31), 2**31 - 1


def _to_decimal(token: str) -> Decimal:
    try:
        return Decimal(token)
    except InvalidOperation as exc:  # pragma: no cover - regex guards the input
        raise NumericParseError(f"Invalid decimal: {token!r}") from exc


def decode_decimal(token: str) -> Decimal:
    """Parse ``token`` as fixed-point, falling back to scientific notation."""
    if _FIXED_POINT.fullmatch(token):
        return _to_decimal(token)
    if _SCIENTIFIC.fullmatch(token):
        return _to_decimal(token)
    raise NumericParseError(f"Invalid decimal: {token!r}")


def decode_optional_decimal(token: str) -> Optional[Decimal]:
    """``None`` for the ``.`` placeholder, otherwise ``decode_decimal``."""
    if token == OPTIONAL_FIELD:
        return None
    return decode_decimal(token)


def is_decimal(token: str) -> bool:
    return bool(_FIXED_POINT.fullmatch(token) or _SCIENTIFIC.fullmatch(token))


def decode_unsigned(token: str, maximum: int = U32_MAX) -> int:
    """Parse a non-negative integer no larger than ``maximum``."""
    if not _UNSIGNED.fullmatch(token):
        raise NumericParseError(f"Invalid unsigned integer: {token!r}")
    value = int(token)
    if value > maximum:
        raise NumericParseError(f"Integer out of range: {token!r}")
    return value


def decode_signed(token: str, minimum: int = I32_MIN, maximum: int = I32_MAX) -> int:
    """Parse a signed integer within ``[minimum, maximum]``."""
    if not _SIGNED.fullmatch(token):
        raise NumericParseError(f"Invalid integer: {token!r}")
    value = int(token)
    if not minimum <= value <= maximum:
        raise NumericParseError(f"Integer out of range: {token!r}")
    return value
