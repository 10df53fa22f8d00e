"""Memory quantities — exact parsing, comparison and binary-SI rendering."""

from __future__ import annotations

import math
import re
from fractions import Fraction

from .exceptions import QuantityError

BINARY_SUFFIXES = {
    "Ki": 1024,
    "Mi": 1024**2,
    "Gi": 1024**3,
    "Ti": 1024**4,
    "Pi": 1024**5,
    "Ei": 1024**6,
}

DECIMAL_SUFFIXES = {
    "m": Fraction(1, 1000),
    "": 1,
    "k": 10**3,
    "M": 10**6,
    "G": 10**9,
    "T": 10**12,
    "P": 10**15,
    "E": 10**18,
}

# Exponents past this are not memory sizes; refusing them bounds the integer work.
MAX_EXPONENT = 100

_QUANTITY_RE = re.compile(
    r"^[+]?(?P<whole>\d*)(?:\.(?P<frac>\d*))?"
    r"(?:(?P<binary>Ki|Mi|Gi|Ti|Pi|Ei)|(?P<exp>[eE][+-]?\d+)|(?P<decimal>[mkMGTPE]?))$"
)


class Quantity:
    """A non-negative memory amount in bytes, held as an exact Fraction."""

    __slots__ = ("_amount", "_text")

    def __init__(self, amount: Fraction | int, text: str | None = None):
        self._amount = Fraction(amount)
        self._text = text

    @classmethod
    def parse(cls, raw: str | int) -> "Quantity":
        """Parse "2Gi", "512M", "1e9", "1500m" or a plain byte count."""
        if isinstance(raw, bool):
            raise QuantityError(f"Invalid quantity: {raw!r}")
        if isinstance(raw, int):
            if raw < 0:
                raise QuantityError(f"Quantity must not be negative: {raw}")
            return cls(raw, str(raw))
        if not isinstance(raw, str):
            raise QuantityError(f"Invalid quantity: {raw!r}")
        text = raw.strip()
        m = _QUANTITY_RE.match(text)
        if not m or not (m.group("whole") or m.group("frac")):
            raise QuantityError(f"Invalid quantity: {raw!r}")
        frac = m.group("frac") or ""
        digits = int((m.group("whole") or "") + frac or "0")
        power = -len(frac)
        if m.group("exp"):
            exp = int(m.group("exp")[1:])
            if abs(exp) > MAX_EXPONENT:
                raise QuantityError(f"Quantity exponent out of range: {raw!r}")
            power += exp
        if m.group("binary"):
            factor = BINARY_SUFFIXES[m.group("binary")]
        elif m.group("exp"):
            factor = 1
        else:
            factor = DECIMAL_SUFFIXES[m.group("decimal") or ""]
        return cls(digits * factor * Fraction(10) ** power, text)

    @classmethod
    def from_bytes(cls, n: int) -> "Quantity":
        return cls(n, format_binary(n))

    @property
    def amount(self) -> Fraction:
        return self._amount

    def value(self) -> int:
        """Integer byte count, rounded up."""
        return math.ceil(self._amount)

    def cmp(self, other: "Quantity") -> int:
        if self._amount > other._amount:
            return 1
        if self._amount < other._amount:
            return -1
        return 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self._amount == other._amount

    def __lt__(self, other: "Quantity") -> bool:
        return self._amount < other._amount

    def __le__(self, other: "Quantity") -> bool:
        return self._amount <= other._amount

    def __gt__(self, other: "Quantity") -> bool:
        return self._amount > other._amount

    def __ge__(self, other: "Quantity") -> bool:
        return self._amount >= other._amount

    def __hash__(self) -> int:
        return hash(self._amount)

    def __str__(self) -> str:
        if self._text is not None:
            return self._text
        return format_binary(self.value())

    def __repr__(self) -> str:
        return f"Quantity({str(self)!r})"


def format_binary(n: int) -> str:
    """Render bytes with the largest binary suffix that divides exactly."""
    if n == 0:
        return "0"
    for suffix, factor in sorted(BINARY_SUFFIXES.items(), key=lambda kv: -kv[1]):
        if n % factor == 0:
            return f"{n // factor}{suffix}"
    return str(n)


def parse_quantity(raw: str | int | Quantity | None) -> Quantity | None:
    """Parse optional values coming from spec documents and settings."""
    if raw is None:
        return None
    if isinstance(raw, Quantity):
        return raw
    return Quantity.parse(raw)
