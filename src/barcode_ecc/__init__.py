"""
Пакет barcode_ecc
=================

Коррекция ошибок Рида-Соломона для символик штрихкодов.

Этот пакет предоставляет:
    - Арифметику поля Галуа GF(2^m) на таблицах логарифмов (m <= 12)
    - Построение порождающего полинома для nsym последовательных корней
    - Систематическое кодирование (деление полиномов на регистре сдвига)
    - Потокобезопасный кэш кодеров, передаваемый явно
    - Раскладки блоков для QR, Micro QR, Data Matrix, Aztec, MaxiCode,
      Australia Post, Grid Matrix и Code One

Пример базового использования:
    >>> from barcode_ecc import EncoderCache, Symbology, encoder
    >>>
    >>> rs = encoder(0x12D, nsym=5, first_root=1)
    >>> rs.check_symbols([142, 164, 186])
    [114, 25, 5, 88, 102]
    >>>
    >>> cache = EncoderCache()
    >>> qr = cache.for_symbology(Symbology.QR_CODE, nsym=10)

Управление логированием:
    >>> import os
    >>> os.environ['BARCODE_ECC_LOG_LEVEL'] = 'DEBUG'

Версия: 0.1.0
Лицензия: MIT
Python: 3.9+
"""

import logging
import os
import sys

from barcode_ecc.cache import CacheStatistics, EncoderCache
from barcode_ecc.config import MAX_SYMBOL_BITS, CodeParameters, Symbology
from barcode_ecc.exceptions import (
    CodeParameterError,
    FieldConfigurationError,
    FieldTooLargeError,
    InvalidPolynomialError,
    NonPrimitivePolynomialError,
    ReedSolomonError,
    SymbolRangeError,
)
from barcode_ecc.galois import GaloisField
from barcode_ecc.reed_solomon import ReedSolomonEncoder, encoder

# =============================================================================
# МЕТАДАННЫЕ ВЕРСИИ
# =============================================================================

__version__ = "0.1.0"
__description__ = "Reed-Solomon error correction for barcode symbologies"
__license__ = "MIT"
__python_requires__ = ">=3.9"

VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

if sys.version_info < (3, 9):
    raise RuntimeError(
        f"barcode_ecc требует Python 3.9 или выше. "
        f"Текущая версия: {sys.version_info.major}."
        f"{sys.version_info.minor}.{sys.version_info.micro}"
    )

# =============================================================================
# КОНФИГУРАЦИЯ ЛОГИРОВАНИЯ
# =============================================================================

_LOGGER_NAME = "barcode_ecc"
_LOG_LEVEL_ENV = "BARCODE_ECC_LOG_LEVEL"


def _setup_logging() -> None:
    """
    Настроить логгер пакета: обработчик stderr и уровень из окружения.

    Уровень берётся из BARCODE_ECC_LOG_LEVEL (DEBUG, INFO, WARNING, ERROR,
    CRITICAL), по умолчанию WARNING. Идемпотентна: если у логгера уже есть
    обработчики, ничего не делает.
    """
    log_level_str = os.environ.get(_LOG_LEVEL_ENV, "WARNING").upper()
    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    log_level = log_level_map.get(log_level_str, logging.WARNING)

    package_logger = logging.getLogger(_LOGGER_NAME)
    if package_logger.handlers:
        return

    package_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)


def get_logger(module_name: str) -> logging.Logger:
    """
    Получить логгер в пространстве имён barcode_ecc.

    Аргументы:
        module_name: Обычно `__name__`; имена вне пакета получают
            префикс "barcode_ecc.".

    Возвращает:
        Экземпляр logging.Logger, наследующий настройки пакета.
    """
    if module_name == _LOGGER_NAME or module_name.startswith(_LOGGER_NAME + "."):
        return logging.getLogger(module_name)
    if module_name == "__main__":
        return logging.getLogger(f"{_LOGGER_NAME}.main")
    return logging.getLogger(f"{_LOGGER_NAME}.{module_name.lstrip('.')}")


_setup_logging()

__all__ = [
    # metadata
    "__version__",
    "get_logger",
    # engine
    "GaloisField",
    "ReedSolomonEncoder",
    "encoder",
    "EncoderCache",
    "CacheStatistics",
    # configuration
    "MAX_SYMBOL_BITS",
    "CodeParameters",
    "Symbology",
    # errors
    "ReedSolomonError",
    "FieldConfigurationError",
    "FieldTooLargeError",
    "InvalidPolynomialError",
    "NonPrimitivePolynomialError",
    "CodeParameterError",
    "SymbolRangeError",
]
