"""
RU: Раскладка кодовых слов коррекции ошибок для конкретных символик (блоки, чередование, порядок)
EN: Per-symbology error-correction layouts (block splitting, interleaving, check codeword order)

Provides:
- QR Code, Micro QR, Data Matrix, Aztec Code, Aztec Rune, MaxiCode,
  Australia Post, Grid Matrix and Code One (versions A-H, S, T)
- Optional shared EncoderCache; without one, encoders are built per call

Every function takes data codewords produced by the symbology's own data
encodation and returns codewords ready for symbol placement. Check codewords
are in transmission order unless the layout says otherwise.
"""

from __future__ import annotations

import logging
from typing import Final, List, Mapping, Optional, Sequence

from barcode_ecc.cache import EncoderCache
from barcode_ecc.config import CodeParameters, Symbology
from barcode_ecc.exceptions import CodeParameterError
from barcode_ecc.reed_solomon import ReedSolomonEncoder

logger = logging.getLogger(__name__)

__all__ = [
    "AZTEC_CODEWORD_SYMBOLOGIES",
    "qr_error_correction",
    "micro_qr_error_correction",
    "data_matrix_error_correction",
    "aztec_error_correction",
    "aztec_rune_error_correction",
    "maxicode_error_correction",
    "australia_post_error_correction",
    "grid_matrix_error_correction",
    "code_one_error_correction",
    "code_one_s_error_correction",
    "code_one_t_error_correction",
]

# Размер кодового слова Aztec (бит) -> профиль поля
AZTEC_CODEWORD_SYMBOLOGIES: Final[Mapping[int, Symbology]] = {
    4: Symbology.AZTEC_4BIT,
    6: Symbology.AZTEC_6BIT,
    8: Symbology.AZTEC_8BIT,
    10: Symbology.AZTEC_10BIT,
    12: Symbology.AZTEC_12BIT,
}

# Количество проверочных слов Australia Post фиксировано
AUSTRALIA_POST_CHECK_SYMBOLS: Final[int] = 4
AZTEC_RUNE_CHECK_SYMBOLS: Final[int] = 5
# 144x144 Data Matrix: 10 блоков, проверочные слова сдвинуты
DATA_MATRIX_SKEW_BLOCKS: Final[int] = 10


def _encoder(
    symbology: Symbology, nsym: int, cache: Optional[EncoderCache]
) -> ReedSolomonEncoder:
    if cache is not None:
        return cache.for_symbology(symbology, nsym)
    return ReedSolomonEncoder.from_parameters(
        CodeParameters.for_symbology(symbology), nsym
    )


def _require_blocks(data: Sequence[int], blocks: int) -> None:
    if blocks < 1:
        raise CodeParameterError(f"blocks must be >= 1, got {blocks}")
    if len(data) < blocks:
        raise CodeParameterError(
            f"{len(data)} data codewords cannot fill {blocks} blocks"
        )


def qr_error_correction(
    data: Sequence[int],
    blocks: int,
    ecc_per_block: int,
    cache: Optional[EncoderCache] = None,
) -> List[int]:
    """
    Split QR data codewords into blocks, add check codewords and interleave.

    Short blocks come first; when the data does not divide evenly, the last
    ``len(data) % blocks`` blocks carry one extra codeword. Data codewords and
    then check codewords are read out column by column across the blocks.

    Args:
        data: Data codewords of the whole symbol.
        blocks: Number of error-correction blocks for the version/level.
        ecc_per_block: Check codewords per block.
        cache: Optional shared encoder cache.

    Returns:
        Interleaved data codewords followed by interleaved check codewords.

    Raises:
        CodeParameterError: Fewer data codewords than blocks.
    """
    _require_blocks(data, blocks)
    rs = _encoder(Symbology.QR_CODE, ecc_per_block, cache)

    short_length = len(data) // blocks
    short_blocks = blocks - len(data) % blocks

    data_blocks: List[Sequence[int]] = []
    check_blocks: List[List[int]] = []
    pos = 0
    for i in range(blocks):
        length = short_length if i < short_blocks else short_length + 1
        block = data[pos : pos + length]
        pos += length
        data_blocks.append(block)
        check_blocks.append(rs.check_symbols(block))

    stream = [block[j] for j in range(short_length) for block in data_blocks]
    stream.extend(block[short_length] for block in data_blocks[short_blocks:])
    stream.extend(checks[j] for j in range(ecc_per_block) for checks in check_blocks)
    logger.debug(
        "QR: %d data codewords in %d blocks, %d checks per block",
        len(data),
        blocks,
        ecc_per_block,
    )
    return stream


def micro_qr_error_correction(
    data: Sequence[int], ecc: int, cache: Optional[EncoderCache] = None
) -> List[int]:
    """Micro QR uses a single block: data followed by ``ecc`` check codewords."""
    return _encoder(Symbology.MICRO_QR, ecc, cache).encode_message(data)


def data_matrix_error_correction(
    data: Sequence[int],
    blocks: int,
    ecc_per_block: int,
    skew: bool = False,
    cache: Optional[EncoderCache] = None,
) -> List[int]:
    """
    Add interleaved Data Matrix check codewords.

    Block ``b`` takes every ``blocks``-th data codeword starting at ``b``; its
    check codewords land at the same stride after the data.

    Args:
        data: Data codewords, including padding.
        blocks: Number of interleaved blocks.
        ecc_per_block: Check codewords per block.
        skew: Rotate check codewords as the 144x144 symbol requires
            (blocks 0-7 move two places later, blocks 8-9 eight places earlier).
        cache: Optional shared encoder cache.

    Returns:
        Data codewords followed by ``blocks * ecc_per_block`` check codewords.

    Raises:
        CodeParameterError: Invalid block count, or skew without 10 blocks.
    """
    _require_blocks(data, blocks)
    if skew and blocks != DATA_MATRIX_SKEW_BLOCKS:
        raise CodeParameterError(
            f"skew requires {DATA_MATRIX_SKEW_BLOCKS} blocks, got {blocks}"
        )
    rs = _encoder(Symbology.DATA_MATRIX, ecc_per_block, cache)

    size = len(data)
    stream = list(data) + [0] * (blocks * ecc_per_block)
    for b in range(blocks):
        checks = rs.check_symbols(data[b::blocks])
        for j, value in enumerate(checks):
            pos = b + j * blocks
            if skew:
                pos = pos + 2 if b < 8 else pos - 8
            stream[size + pos] = value
    return stream


def aztec_error_correction(
    data: Sequence[int],
    codeword_bits: int,
    ecc: int,
    cache: Optional[EncoderCache] = None,
) -> List[int]:
    """
    Add Aztec check codewords; the field depends on the codeword size.

    Args:
        data: Data codewords (or mode message nibbles when codeword_bits is 4).
        codeword_bits: 4, 6, 8, 10 or 12.
        ecc: Number of check codewords.
        cache: Optional shared encoder cache.

    Raises:
        CodeParameterError: Unsupported codeword size.
    """
    symbology = AZTEC_CODEWORD_SYMBOLOGIES.get(codeword_bits)
    if symbology is None:
        raise CodeParameterError(f"Unrecognized Aztec codeword size: {codeword_bits}")
    return _encoder(symbology, ecc, cache).encode_message(data)


def aztec_rune_error_correction(
    value: int, cache: Optional[EncoderCache] = None
) -> List[int]:
    """
    Encode an Aztec Rune value (0-255) as two 4-bit words plus five checks.

    Example:
        >>> len(aztec_rune_error_correction(25))
        7
    """
    if not 0 <= value <= 255:
        raise CodeParameterError(f"Aztec Rune value must be 0-255, got {value}")
    words = [value >> 4, value & 0x0F]
    return _encoder(Symbology.AZTEC_RUNE, AZTEC_RUNE_CHECK_SYMBOLS, cache).encode_message(
        words
    )


def maxicode_error_correction(
    primary: Sequence[int],
    secondary: Sequence[int],
    secondary_ecc: int,
    cache: Optional[EncoderCache] = None,
) -> List[int]:
    """
    Build the full MaxiCode codeword stream.

    The primary message always gets as many checks as it has codewords. The
    secondary message is split into even and odd positions, each half gets
    ``secondary_ecc / 2`` checks, and the checks are re-interleaved after it.

    Returns:
        primary + primary checks + secondary + interleaved secondary checks.

    Raises:
        CodeParameterError: Odd secondary length or odd secondary_ecc.
    """
    if len(secondary) % 2 or secondary_ecc % 2:
        raise CodeParameterError(
            "MaxiCode secondary message and its check count must be even, "
            f"got {len(secondary)} and {secondary_ecc}"
        )
    half = secondary_ecc // 2
    primary_rs = _encoder(Symbology.MAXICODE, len(primary), cache)
    secondary_rs = _encoder(Symbology.MAXICODE, half, cache)

    even_checks = secondary_rs.check_symbols(secondary[0::2])
    odd_checks = secondary_rs.check_symbols(secondary[1::2])

    stream = primary_rs.encode_message(primary)
    stream.extend(secondary)
    for even, odd in zip(even_checks, odd_checks):
        stream.append(even)
        stream.append(odd)
    return stream


def australia_post_error_correction(
    triples: Sequence[int], cache: Optional[EncoderCache] = None
) -> List[int]:
    """Return the four check symbols over the 6-bit bar-state triples."""
    return _encoder(
        Symbology.AUSTRALIA_POST, AUSTRALIA_POST_CHECK_SYMBOLS, cache
    ).check_symbols(triples)


def grid_matrix_error_correction(
    data: Sequence[int],
    block_size: int,
    long_blocks: int,
    short_blocks: int,
    ecc_first: int,
    ecc_first_blocks: int,
    ecc_rest: int = 0,
    cache: Optional[EncoderCache] = None,
) -> List[int]:
    """
    Split Grid Matrix data into blocks, add check codewords and interleave.

    The first ``long_blocks`` blocks hold ``block_size`` codewords (data and
    checks together), the remaining ``short_blocks`` one codeword less. The
    first ``ecc_first_blocks`` blocks carry ``ecc_first`` check codewords,
    the others ``ecc_rest``. Data codewords are consumed in order; the
    finished blocks are read out column by column, and the last codeword of
    each long block goes to the end.

    Args:
        data: 7-bit data codewords, including padding.
        block_size: Codewords in a long block.
        long_blocks: Number of long blocks (>= 1).
        short_blocks: Number of short blocks.
        ecc_first: Check codewords in each of the first blocks.
        ecc_first_blocks: How many blocks get ``ecc_first`` checks.
        ecc_rest: Check codewords in every other block.
        cache: Optional shared encoder cache.

    Returns:
        ``long_blocks * block_size + short_blocks * (block_size - 1)``
        interleaved codewords.

    Raises:
        CodeParameterError: Block layout does not fit the data.

    Example:
        >>> grid_matrix_error_correction([10, 20, 30, 40, 50], 9, 1, 0, 4, 1)
        [10, 20, 30, 40, 50, 35, 91, 120, 54]
    """
    if long_blocks < 1 or short_blocks < 0:
        raise CodeParameterError(
            f"invalid block counts: {long_blocks} long, {short_blocks} short"
        )
    total_blocks = long_blocks + short_blocks
    if not 0 <= ecc_first_blocks <= total_blocks:
        raise CodeParameterError(
            f"ecc_first_blocks must be between 0 and {total_blocks}, "
            f"got {ecc_first_blocks}"
        )

    layout = []
    for i in range(total_blocks):
        length = block_size if i < long_blocks else block_size - 1
        ecc = ecc_first if i < ecc_first_blocks else ecc_rest
        if not 0 <= ecc < length:
            raise CodeParameterError(
                f"block {i} of {length} codewords cannot carry {ecc} checks"
            )
        layout.append((length - ecc, ecc))

    expected = sum(size for size, _ in layout)
    if len(data) != expected:
        raise CodeParameterError(
            f"block layout takes {expected} data codewords, got {len(data)}"
        )

    short_length = block_size - 1
    stream = [0] * (long_blocks * block_size + short_blocks * short_length)
    pos = 0
    for i, (size, ecc) in enumerate(layout):
        block = list(data[pos : pos + size])
        pos += size
        if ecc:
            rs = _encoder(Symbology.GRID_MATRIX, ecc, cache)
            block.extend(rs.check_symbols(block))
        for j in range(short_length):
            stream[total_blocks * j + i] = block[j]
        if i < long_blocks:
            stream[total_blocks * short_length + i] = block[short_length]
    logger.debug(
        "Grid Matrix: %d data codewords in %d blocks", len(data), total_blocks
    )
    return stream


def code_one_error_correction(
    data: Sequence[int],
    blocks: int,
    ecc_per_block: int,
    cache: Optional[EncoderCache] = None,
) -> List[int]:
    """
    Code One versions A-H: interleaved blocks, generator roots from alpha^0.

    Block ``i`` takes every ``blocks``-th data codeword starting at ``i``. The
    check area is filled from its end: the k-th register symbol of block i
    goes to position ``len - 1 - (k * blocks + i)``.

    Raises:
        CodeParameterError: Data length not a multiple of blocks.
    """
    _require_blocks(data, blocks)
    if len(data) % blocks:
        raise CodeParameterError(
            f"{len(data)} data codewords do not split evenly into {blocks} blocks"
        )
    rs = _encoder(Symbology.CODE_ONE, ecc_per_block, cache)

    total = blocks * ecc_per_block
    checks = [0] * total
    for i in range(blocks):
        register = rs.encode(data[i::blocks])
        for k, value in enumerate(register):
            checks[total - 1 - (k * blocks + i)] = value
    return list(data) + checks


def code_one_s_error_correction(
    data: Sequence[int], cache: Optional[EncoderCache] = None
) -> List[int]:
    """Code One version S: 5-bit codewords, as many checks as data codewords."""
    return _encoder(Symbology.CODE_ONE_S, len(data), cache).encode_message(data)


def code_one_t_error_correction(
    data: Sequence[int], ecc: int, cache: Optional[EncoderCache] = None
) -> List[int]:
    """Code One version T: single block over the Data Matrix field."""
    return _encoder(Symbology.CODE_ONE_T, ecc, cache).encode_message(data)
