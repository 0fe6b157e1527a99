# -*- coding: utf-8 -*-
"""
RU: Централизованная иерархия исключений подсистемы коррекции ошибок Рида-Соломона.
EN: Centralized exception hierarchy for the Reed-Solomon error-correction subsystem.

Guidelines:
- Configuration errors are programming errors in symbology parameters, not transient failures.
- Subclasses also derive from ValueError so generic callers can catch them as bad arguments.
- Messages carry parameters (polynomial, nsym, index), never the encoded payload.
"""

from __future__ import annotations

from typing import Optional


class ReedSolomonError(Exception):
    """Base exception for all Reed-Solomon failures."""

    def __init__(
        self, message: str = "", *, cause: Optional[BaseException] = None
    ) -> None:
        super().__init__(message)
        self.__cause__ = cause


# Field configuration
class FieldConfigurationError(ReedSolomonError, ValueError):
    """Base class for invalid Galois field parameters."""


class FieldTooLargeError(FieldConfigurationError):
    """Raised when the polynomial implies a field wider than MAX_SYMBOL_BITS."""


class InvalidPolynomialError(FieldConfigurationError):
    """Raised when the polynomial has no set bit above bit 0."""


class NonPrimitivePolynomialError(FieldConfigurationError):
    """Raised in strict mode when the polynomial does not generate the whole field."""


# Code parameters and data
class CodeParameterError(ReedSolomonError, ValueError):
    """Raised on invalid nsym, first root, data length or block layout."""


class SymbolRangeError(ReedSolomonError, ValueError):
    """Raised in strict mode when a data symbol is not an element of the field."""


__all__ = [
    "ReedSolomonError",
    "FieldConfigurationError",
    "FieldTooLargeError",
    "InvalidPolynomialError",
    "NonPrimitivePolynomialError",
    "CodeParameterError",
    "SymbolRangeError",
]
