# -*- coding: utf-8 -*-
"""
RU: Арифметика поля Галуа GF(2^m) на таблицах логарифмов/антилогарифмов.
EN: GF(2^m) arithmetic backed by log/antilog lookup tables.

Elements are m-bit integers. Addition is XOR; multiplication adds discrete
logarithms modulo the group order 2^m - 1.

Trust boundary:
    The field is built from whatever polynomial the caller supplies. A
    non-primitive polynomial yields a non-bijective table and silently wrong
    arithmetic unless the field is constructed with ``strict=True``.
"""

from __future__ import annotations

import logging
from typing import Tuple

from barcode_ecc.config import symbol_bits_of
from barcode_ecc.exceptions import NonPrimitivePolynomialError

logger = logging.getLogger(__name__)

__all__ = ["GaloisField"]


class GaloisField:
    """
    Galois field GF(2^m) defined by a primitive polynomial.

    Args:
        primitive_polynomial: Field polynomial as a bitmask, e.g. 0x11D for
            x^8 + x^4 + x^3 + x^2 + 1. Its highest set bit defines m.
        strict: Verify that the polynomial generates every nonzero element.

    Raises:
        InvalidPolynomialError: Polynomial below 2.
        FieldTooLargeError: m above MAX_SYMBOL_BITS.
        NonPrimitivePolynomialError: strict=True and the tables are not bijective.

    Examples:
        >>> gf = GaloisField(0x43)
        >>> gf.symbol_bits, gf.field_size
        (6, 63)
        >>> gf.multiply(gf.power(5), gf.power(60))
        1
    """

    def __init__(self, primitive_polynomial: int, strict: bool = False) -> None:
        self._poly = primitive_polynomial
        self._bits = symbol_bits_of(primitive_polynomial)
        self._size = (1 << self._bits) - 1
        self._strict = strict
        self._antilog: Tuple[int, ...]
        self._log: Tuple[int, ...]
        self._primitive: bool
        self._build_tables()

    def _build_tables(self) -> None:
        """Populate antilog (exponent -> element) and log (element -> exponent)."""
        top_bit = 1 << self._bits
        antilog = [0] * self._size
        log = [0] * (self._size + 1)
        seen = [False] * (self._size + 1)
        bijective = True

        p = 1
        for v in range(self._size):
            if p == 0 or seen[p]:
                bijective = False
                if self._strict:
                    logger.error(
                        "Polynomial %#x is not primitive: cycle closes after %d steps",
                        self._poly,
                        v,
                    )
                    raise NonPrimitivePolynomialError(
                        f"Polynomial {self._poly:#x} does not generate GF(2^{self._bits}): "
                        f"element {p} repeats at exponent {v}"
                    )
            seen[p] = True
            antilog[v] = p
            log[p] = v
            # умножение на примитивный элемент с приведением по модулю полинома
            p <<= 1
            if p & top_bit:
                p ^= self._poly

        self._antilog = tuple(antilog)
        self._log = tuple(log)
        self._primitive = bijective
        logger.debug(
            "Built GF(2^%d) tables for polynomial %#x (primitive=%s)",
            self._bits,
            self._poly,
            bijective,
        )

    # --- parameters

    @property
    def primitive_polynomial(self) -> int:
        return self._poly

    @property
    def symbol_bits(self) -> int:
        return self._bits

    @property
    def field_size(self) -> int:
        """Multiplicative group order 2^m - 1; also the largest element value."""
        return self._size

    @property
    def antilog(self) -> Tuple[int, ...]:
        """antilog[v] = alpha^v for v in 0..field_size-1."""
        return self._antilog

    @property
    def log(self) -> Tuple[int, ...]:
        """log[x] = v such that alpha^v = x; log[0] is unused and kept at 0."""
        return self._log

    def is_primitive(self) -> bool:
        """Return True if the antilog table visits every nonzero element once."""
        return self._primitive

    # --- arithmetic

    def add(self, a: int, b: int) -> int:
        return a ^ b

    def multiply(self, a: int, b: int) -> int:
        if a == 0 or b == 0:
            return 0
        return self._antilog[(self._log[a] + self._log[b]) % self._size]

    def divide(self, a: int, b: int) -> int:
        if b == 0:
            raise ZeroDivisionError(f"Division by zero in GF(2^{self._bits})")
        if a == 0:
            return 0
        return self._antilog[(self._log[a] - self._log[b]) % self._size]

    def inverse(self, a: int) -> int:
        if a == 0:
            raise ZeroDivisionError("Inverse of zero")
        return self._antilog[(self._size - self._log[a]) % self._size]

    def power(self, exponent: int) -> int:
        """Return alpha^exponent."""
        return self._antilog[exponent % self._size]

    def __repr__(self) -> str:
        return f"GaloisField({self._poly:#x}, bits={self._bits})"
