# -*- coding: utf-8 -*-
"""
RU: Параметры кодов Рида-Соломона с профилями для разных символик штрихкодов.
EN: Reed-Solomon code parameters with per-symbology profiles.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

from barcode_ecc.exceptions import (
    CodeParameterError,
    FieldTooLargeError,
    InvalidPolynomialError,
)

# Таблицы растут как 2^m, 12 бит хватает самому широкому потребителю (Aztec)
MAX_SYMBOL_BITS: Final[int] = 12


def symbol_bits_of(primitive_polynomial: int) -> int:
    """
    Return m, the position of the highest set bit of the polynomial.

    Raises:
        InvalidPolynomialError: If no bit above bit 0 is set.
        FieldTooLargeError: If m exceeds MAX_SYMBOL_BITS.

    Examples:
        >>> symbol_bits_of(0x11D)
        8
        >>> symbol_bits_of(0x13)
        4
    """
    if primitive_polynomial < 2:
        raise InvalidPolynomialError(
            f"Primitive polynomial must have a bit set above bit 0, got {primitive_polynomial:#x}"
        )
    bits = primitive_polynomial.bit_length() - 1
    if bits > MAX_SYMBOL_BITS:
        raise FieldTooLargeError(
            f"Polynomial {primitive_polynomial:#x} implies GF(2^{bits}), "
            f"maximum supported is GF(2^{MAX_SYMBOL_BITS})"
        )
    return bits


class Symbology(str, Enum):
    """Barcode symbologies whose error correction runs on this engine."""

    QR_CODE = "qr_code"
    MICRO_QR = "micro_qr"
    DATA_MATRIX = "data_matrix"

    # Aztec: codeword size depends on the number of layers
    AZTEC_4BIT = "aztec_4bit"  # mode message
    AZTEC_6BIT = "aztec_6bit"
    AZTEC_8BIT = "aztec_8bit"
    AZTEC_10BIT = "aztec_10bit"
    AZTEC_12BIT = "aztec_12bit"
    AZTEC_RUNE = "aztec_rune"

    MAXICODE = "maxicode"
    AUSTRALIA_POST = "australia_post"
    GRID_MATRIX = "grid_matrix"

    # Code One: versions A-H, S and T use different fields
    CODE_ONE = "code_one"
    CODE_ONE_S = "code_one_s"
    CODE_ONE_T = "code_one_t"


@dataclass(frozen=True)
class CodeParameters:
    """
    Field and generator parameters of a Reed-Solomon code.

    Attributes:
        primitive_polynomial: Field-defining polynomial as an integer bitmask.
        first_root: Exponent of the first consecutive generator root.

    Examples:
        >>> params = CodeParameters.for_symbology(Symbology.DATA_MATRIX)
        >>> hex(params.primitive_polynomial), params.first_root
        ('0x12d', 1)
        >>> params.symbol_bits
        8
    """

    primitive_polynomial: int
    first_root: int = 0

    def __post_init__(self) -> None:
        """Validate parameters."""
        symbol_bits_of(self.primitive_polynomial)
        if self.first_root < 0:
            raise CodeParameterError(f"first_root must be >= 0, got {self.first_root}")

    @property
    def symbol_bits(self) -> int:
        return symbol_bits_of(self.primitive_polynomial)

    @property
    def field_size(self) -> int:
        """Order of the multiplicative group, 2^m - 1."""
        return (1 << self.symbol_bits) - 1

    @classmethod
    def for_symbology(cls, symbology: Symbology) -> CodeParameters:
        """
        Return the parameters used by the given symbology.

        Args:
            symbology: Barcode symbology.

        Returns:
            CodeParameters instance.
        """
        return _SYMBOLOGY_PARAMS[symbology]


# Predefined profiles
_SYMBOLOGY_PARAMS: Final[dict[Symbology, CodeParameters]] = {
    # x^8 + x^4 + x^3 + x^2 + 1
    Symbology.QR_CODE: CodeParameters(0x11D, first_root=0),
    Symbology.MICRO_QR: CodeParameters(0x11D, first_root=0),
    # x^8 + x^5 + x^3 + x^2 + 1
    Symbology.DATA_MATRIX: CodeParameters(0x12D, first_root=1),
    # x^4 + x + 1
    Symbology.AZTEC_4BIT: CodeParameters(0x13, first_root=1),
    # x^6 + x + 1
    Symbology.AZTEC_6BIT: CodeParameters(0x43, first_root=1),
    Symbology.AZTEC_8BIT: CodeParameters(0x12D, first_root=1),
    # x^10 + x^3 + 1
    Symbology.AZTEC_10BIT: CodeParameters(0x409, first_root=1),
    # x^12 + x^6 + x^5 + x^3 + 1
    Symbology.AZTEC_12BIT: CodeParameters(0x1069, first_root=1),
    Symbology.AZTEC_RUNE: CodeParameters(0x13, first_root=1),
    Symbology.MAXICODE: CodeParameters(0x43, first_root=1),
    Symbology.AUSTRALIA_POST: CodeParameters(0x43, first_root=1),
    # x^7 + x^3 + 1
    Symbology.GRID_MATRIX: CodeParameters(0x89, first_root=1),
    Symbology.CODE_ONE: CodeParameters(0x12D, first_root=0),
    # x^5 + x^2 + 1
    Symbology.CODE_ONE_S: CodeParameters(0x25, first_root=1),
    Symbology.CODE_ONE_T: CodeParameters(0x12D, first_root=1),
}


__all__ = [
    "MAX_SYMBOL_BITS",
    "symbol_bits_of",
    "Symbology",
    "CodeParameters",
]
