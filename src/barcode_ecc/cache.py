"""
Кэш экземпляров кодеров Рида-Соломона.

Обеспечивает:
- Ленивое построение полей и кодеров по ключу (polynomial, nsym, first_root)
- Одно построение на ключ при конкурентном доступе (RLock)
- Общие таблицы поля для кодеров с разным nsym
- Статистику попаданий/промахов

Кэш не глобальный: его создаёт и передаёт дальше тот, кто строит символы.

Example:
    >>> from barcode_ecc.cache import EncoderCache
    >>> cache = EncoderCache()
    >>> rs = cache.get_or_create(0x12D, nsym=5, first_root=1)
    >>> rs is cache.get_or_create(0x12D, nsym=5, first_root=1)
    True

Thread Safety:
    Все публичные методы thread-safe благодаря RLock. Построенные экземпляры
    неизменяемы и могут использоваться из разных потоков.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from barcode_ecc.config import CodeParameters, Symbology
from barcode_ecc.galois import GaloisField
from barcode_ecc.reed_solomon import ReedSolomonEncoder

logger = logging.getLogger(__name__)

__all__ = [
    "CacheKey",
    "CacheStatistics",
    "EncoderCache",
]

CacheKey = Tuple[int, int, int]


@dataclass(frozen=True)
class CacheStatistics:
    """
    Снимок состояния кэша.

    Attributes:
        fields: Количество построенных полей
        encoders: Количество построенных кодеров
        hits: Запросы, обслуженные из кэша
        misses: Запросы, потребовавшие построения
    """

    fields: int
    encoders: int
    hits: int
    misses: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fields": self.fields,
            "encoders": self.encoders,
            "hits": self.hits,
            "misses": self.misses,
        }


class EncoderCache:
    """
    Thread-safe compute-once cache of Galois fields and Reed-Solomon encoders.

    Args:
        strict: Build fields and encoders in strict mode.

    Example:
        >>> cache = EncoderCache()
        >>> qr = cache.for_symbology(Symbology.QR_CODE, nsym=10)
        >>> qr.field is cache.field(0x11D)
        True
    """

    def __init__(self, strict: bool = False) -> None:
        self._lock = threading.RLock()
        self._strict = strict
        self._fields: Dict[int, GaloisField] = {}
        self._encoders: Dict[CacheKey, ReedSolomonEncoder] = {}
        self._hits = 0
        self._misses = 0

    def field(self, primitive_polynomial: int) -> GaloisField:
        """
        Return the shared field for a polynomial, building it on first use.

        Raises:
            FieldConfigurationError: Invalid or too wide polynomial.
        """
        with self._lock:
            gf = self._fields.get(primitive_polynomial)
            if gf is None:
                gf = GaloisField(primitive_polynomial, strict=self._strict)
                self._fields[primitive_polynomial] = gf
                logger.debug("Cached field %r", gf)
            return gf

    def get_or_create(
        self,
        primitive_polynomial: int,
        nsym: int,
        first_root: int = 0,
        use_cache: bool = True,
    ) -> ReedSolomonEncoder:
        """
        Return an encoder for the given parameters.

        Args:
            primitive_polynomial: Field polynomial as a bitmask.
            nsym: Number of check symbols.
            first_root: Exponent of the first generator root.
            use_cache: When False, build a private encoder and store nothing.

        Returns:
            Fully built encoder; with use_cache=True the same instance for
            every call with the same key.

        Raises:
            FieldConfigurationError: Invalid or too wide polynomial.
            CodeParameterError: nsym < 1 or first_root < 0.

        Thread Safety:
            Concurrent callers with the same key block until one build
            finishes and all receive that instance.
        """
        if not use_cache:
            return ReedSolomonEncoder(
                GaloisField(primitive_polynomial, strict=self._strict),
                nsym,
                first_root,
                strict=self._strict,
            )

        key: CacheKey = (primitive_polynomial, nsym, first_root)
        with self._lock:
            cached = self._encoders.get(key)
            if cached is not None:
                self._hits += 1
                return cached

            self._misses += 1
            built = ReedSolomonEncoder(
                self.field(primitive_polynomial),
                nsym,
                first_root,
                strict=self._strict,
            )
            self._encoders[key] = built
            logger.debug("Cached encoder %r", built)
            return built

    def for_parameters(
        self, params: CodeParameters, nsym: int, use_cache: bool = True
    ) -> ReedSolomonEncoder:
        return self.get_or_create(
            params.primitive_polynomial, nsym, params.first_root, use_cache
        )

    def for_symbology(
        self, symbology: Symbology, nsym: int, use_cache: bool = True
    ) -> ReedSolomonEncoder:
        """Return an encoder with the field and first root of a symbology."""
        return self.for_parameters(
            CodeParameters.for_symbology(symbology), nsym, use_cache
        )

    def stats(self) -> CacheStatistics:
        with self._lock:
            return CacheStatistics(
                fields=len(self._fields),
                encoders=len(self._encoders),
                hits=self._hits,
                misses=self._misses,
            )

    def clear(self) -> None:
        """Drop every cached field and encoder and reset the counters."""
        with self._lock:
            self._fields.clear()
            self._encoders.clear()
            self._hits = 0
            self._misses = 0
            logger.debug("Encoder cache cleared")

    def __len__(self) -> int:
        with self._lock:
            return len(self._encoders)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._encoders
