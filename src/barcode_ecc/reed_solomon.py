# -*- coding: utf-8 -*-
"""
RU: Систематический кодер Рида-Соломона над GF(2^m) для символик штрихкодов.
EN: Systematic Reed-Solomon encoder over GF(2^m) for barcode symbologies.

Provides:
- Generator polynomial construction for nsym consecutive roots alpha^(first_root + k)
- LFSR polynomial division producing nsym check symbols
- Syndrome evaluation for verifying finished codewords

Symbol order:
    ``encode`` returns the remainder register: element k is the coefficient of
    x^k. Barcode symbologies transmit the highest degree first, which is what
    ``check_symbols`` and ``encode_message`` return.

Trust boundary:
    Encoders are called by fixed symbology code, not by untrusted input. Data
    symbols are not range-checked unless the encoder is built with
    ``strict=True``; otherwise only their low m bits are used, so out-of-range
    symbols give deterministic but meaningless check symbols.

Example:
    >>> rs = encoder(0x11D, nsym=10, first_root=0)
    >>> data = [32, 91, 11, 120, 209, 114, 220, 77, 67, 64, 236, 17, 236, 17, 236, 17]
    >>> rs.check_symbols(data)
    [196, 35, 39, 119, 235, 215, 231, 226, 93, 23]
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from barcode_ecc.config import CodeParameters
from barcode_ecc.exceptions import CodeParameterError, SymbolRangeError
from barcode_ecc.galois import GaloisField

logger = logging.getLogger(__name__)

__all__ = [
    "ReedSolomonEncoder",
    "encoder",
]


class ReedSolomonEncoder:
    """
    Reed-Solomon encoder with a fixed number of check symbols.

    Immutable after construction and safe to share between threads: every
    ``encode`` call works on its own buffer.

    Args:
        field: Galois field to compute in.
        nsym: Number of check symbols produced per call (>= 1).
        first_root: Exponent of the first generator root (>= 0).
        strict: Reject data symbols outside the field.

    Raises:
        CodeParameterError: nsym < 1 or first_root < 0.

    Examples:
        >>> rs = ReedSolomonEncoder(GaloisField(0x12D), nsym=5, first_root=1)
        >>> rs.check_symbols([142, 164, 186])
        [114, 25, 5, 88, 102]
    """

    def __init__(
        self,
        field: GaloisField,
        nsym: int,
        first_root: int = 0,
        strict: bool = False,
    ) -> None:
        if nsym < 1:
            logger.error("nsym must be >= 1, got %r", nsym)
            raise CodeParameterError(f"nsym must be >= 1, got {nsym}")
        if first_root < 0:
            logger.error("first_root must be >= 0, got %r", first_root)
            raise CodeParameterError(f"first_root must be >= 0, got {first_root}")
        self._field = field
        self._nsym = nsym
        self._first_root = first_root
        self._strict = strict
        self._generator = self._build_generator()

    @classmethod
    def from_parameters(
        cls, params: CodeParameters, nsym: int, strict: bool = False
    ) -> ReedSolomonEncoder:
        """Build an encoder (and its field) from a CodeParameters profile."""
        return cls(
            GaloisField(params.primitive_polynomial, strict=strict),
            nsym,
            params.first_root,
            strict=strict,
        )

    def _build_generator(self) -> Tuple[int, ...]:
        """Expand prod_{k<nsym} (x - alpha^(first_root + k)); index k holds x^k."""
        gf = self._field
        poly = [0] * (self._nsym + 1)
        poly[0] = 1
        index = self._first_root
        for i in range(1, self._nsym + 1):
            root = gf.power(index)
            poly[i] = 1
            for k in range(i - 1, 0, -1):
                poly[k] = gf.multiply(poly[k], root) ^ poly[k - 1]
            poly[0] = gf.multiply(poly[0], root)
            index += 1
        logger.debug(
            "Generator for poly=%#x nsym=%d first_root=%d: %s",
            gf.primitive_polynomial,
            self._nsym,
            self._first_root,
            poly,
        )
        return tuple(poly)

    # --- parameters

    @property
    def field(self) -> GaloisField:
        return self._field

    @property
    def nsym(self) -> int:
        return self._nsym

    @property
    def first_root(self) -> int:
        return self._first_root

    @property
    def generator(self) -> Tuple[int, ...]:
        """Generator coefficients, lowest degree first; always nsym + 1 long."""
        return self._generator

    @property
    def parameters(self) -> CodeParameters:
        return CodeParameters(self._field.primitive_polynomial, self._first_root)

    # --- encoding

    def _consumed(self, data: Sequence[int], length: Optional[int]) -> Sequence[int]:
        if length is None:
            return data
        if not 0 <= length <= len(data):
            raise CodeParameterError(
                f"length must be between 0 and {len(data)}, got {length}"
            )
        return data[:length]

    def encode(self, data: Sequence[int], length: Optional[int] = None) -> List[int]:
        """
        Compute the check symbols of the first ``length`` data symbols.

        Args:
            data: Data symbols, each an element of the field.
            length: Number of leading symbols to consume (default: all), which
                lets callers pass oversized scratch buffers.

        Returns:
            nsym check symbols in register order: element i is the coefficient
            of x^i of the remainder.

        Raises:
            CodeParameterError: length outside 0..len(data).
            SymbolRangeError: strict mode and a symbol outside 0..field_size.
        """
        message = self._consumed(data, length)
        gf = self._field
        gen = self._generator
        last = self._nsym - 1
        res = [0] * self._nsym

        mask = gf.field_size
        if self._strict:
            for pos, symbol in enumerate(message):
                if not 0 <= symbol <= mask:
                    raise SymbolRangeError(
                        f"Symbol at position {pos} is outside GF(2^{gf.symbol_bits})"
                    )

        for symbol in message:
            # вне строгого режима лишние старшие биты отбрасываются
            feedback = res[last] ^ (symbol & mask)
            if feedback:
                for k in range(last, 0, -1):
                    res[k] = res[k - 1] ^ gf.multiply(feedback, gen[k])
                res[0] = gf.multiply(feedback, gen[0])
            else:
                res[1:] = res[:last]
                res[0] = 0
        return res

    def check_symbols(
        self, data: Sequence[int], length: Optional[int] = None
    ) -> List[int]:
        """Check symbols in transmission order (highest degree first)."""
        return self.encode(data, length)[::-1]

    def encode_message(
        self, data: Sequence[int], length: Optional[int] = None
    ) -> List[int]:
        """Return the systematic codeword: data followed by its check symbols."""
        message = list(self._consumed(data, length))
        return message + self.check_symbols(message)

    def syndromes(self, codeword: Sequence[int]) -> List[int]:
        """
        Evaluate a transmission-order codeword at every generator root.

        Returns:
            nsym values; all zero when the codeword is consistent.
        """
        gf = self._field
        result = []
        for j in range(self._nsym):
            x = gf.power(self._first_root + j)
            acc = 0
            for c in codeword:
                acc = gf.multiply(acc, x) ^ c
            result.append(acc)
        return result

    def __repr__(self) -> str:
        return (
            f"ReedSolomonEncoder(poly={self._field.primitive_polynomial:#x}, "
            f"nsym={self._nsym}, first_root={self._first_root})"
        )


def encoder(
    primitive_polynomial: int,
    nsym: int,
    first_root: int = 0,
    strict: bool = False,
) -> ReedSolomonEncoder:
    """
    Build a new encoder from raw field and code parameters.

    Args:
        primitive_polynomial: Field polynomial as a bitmask.
        nsym: Number of check symbols.
        first_root: Exponent of the first generator root.
        strict: Verify the polynomial and range-check data symbols.

    Raises:
        FieldTooLargeError: The polynomial implies more than MAX_SYMBOL_BITS bits.
        InvalidPolynomialError: Polynomial below 2.
        CodeParameterError: nsym < 1 or first_root < 0.
    """
    return ReedSolomonEncoder(
        GaloisField(primitive_polynomial, strict=strict),
        nsym,
        first_root,
        strict=strict,
    )
