"""
Unit-тесты для раскладок коррекции ошибок по символикам.
"""

from typing import List

import pytest

from barcode_ecc.cache import EncoderCache
from barcode_ecc.exceptions import CodeParameterError
from barcode_ecc.reed_solomon import encoder
from barcode_ecc.symbology import (
    australia_post_error_correction,
    aztec_error_correction,
    aztec_rune_error_correction,
    code_one_error_correction,
    code_one_s_error_correction,
    code_one_t_error_correction,
    data_matrix_error_correction,
    grid_matrix_error_correction,
    maxicode_error_correction,
    micro_qr_error_correction,
    qr_error_correction,
)

QR_HELLO_WORLD_DATA: List[int] = [
    32, 91, 11, 120, 209, 114, 220, 77, 67, 64, 236, 17, 236, 17, 236, 17,
]
QR_HELLO_WORLD_ECC: List[int] = [196, 35, 39, 119, 235, 215, 231, 226, 93, 23]


class TestQrCode:
    def test_single_block(self) -> None:
        stream = qr_error_correction(QR_HELLO_WORLD_DATA, blocks=1, ecc_per_block=10)
        assert stream == QR_HELLO_WORLD_DATA + QR_HELLO_WORLD_ECC

    def test_interleaving_with_long_blocks(self) -> None:
        data = list(range(46))
        stream = qr_error_correction(data, blocks=4, ecc_per_block=6)
        assert len(stream) == 46 + 4 * 6

        # two short blocks of 11, two long blocks of 12
        blocks = [data[0:11], data[11:22], data[22:34], data[34:46]]
        assert stream[:4] == [0, 11, 22, 34]
        assert stream[4:8] == [1, 12, 23, 35]
        assert stream[44:46] == [33, 45]

        rs = encoder(0x11D, 6, 0)
        checks = [rs.check_symbols(block) for block in blocks]
        expected_ecc = [checks[b][j] for j in range(6) for b in range(4)]
        assert stream[46:] == expected_ecc

    def test_more_blocks_than_data(self) -> None:
        with pytest.raises(CodeParameterError, match="blocks"):
            qr_error_correction([1, 2], blocks=3, ecc_per_block=4)

    def test_zero_blocks(self) -> None:
        with pytest.raises(CodeParameterError):
            qr_error_correction([1, 2], blocks=0, ecc_per_block=4)

    def test_with_cache(self) -> None:
        cache = EncoderCache()
        stream = qr_error_correction(
            QR_HELLO_WORLD_DATA, blocks=1, ecc_per_block=10, cache=cache
        )
        assert stream[16:] == QR_HELLO_WORLD_ECC
        assert (0x11D, 10, 0) in cache

    def test_micro_qr(self) -> None:
        data = [64, 24, 172, 195, 0]
        rs = encoder(0x11D, 5, 0)
        assert micro_qr_error_correction(data, 5) == data + rs.check_symbols(data)


class TestDataMatrix:
    def test_123456(self) -> None:
        assert data_matrix_error_correction([142, 164, 186], blocks=1, ecc_per_block=5) == [
            142, 164, 186, 114, 25, 5, 88, 102,
        ]

    def test_interleaved_blocks(self) -> None:
        data = [10, 20, 30, 40, 50, 60, 70]
        stream = data_matrix_error_correction(data, blocks=2, ecc_per_block=3)
        rs = encoder(0x12D, 3, 1)
        even = rs.check_symbols([10, 30, 50, 70])
        odd = rs.check_symbols([20, 40, 60])
        assert stream[:7] == data
        assert stream[7:] == [even[0], odd[0], even[1], odd[1], even[2], odd[2]]

    def test_skew_rotates_check_codewords(self) -> None:
        data = list(range(1, 21))
        plain = data_matrix_error_correction(data, blocks=10, ecc_per_block=2)
        skewed = data_matrix_error_correction(data, blocks=10, ecc_per_block=2, skew=True)
        assert skewed[:20] == plain[:20]
        assert sorted(skewed[20:]) == sorted(plain[20:])
        for b in range(10):
            for j in range(2):
                pos = b + j * 10
                moved = pos + 2 if b < 8 else pos - 8
                assert skewed[20 + moved] == plain[20 + pos]

    def test_skew_requires_ten_blocks(self) -> None:
        with pytest.raises(CodeParameterError, match="skew"):
            data_matrix_error_correction(list(range(8)), blocks=2, ecc_per_block=2, skew=True)


class TestAztec:
    @pytest.mark.parametrize(
        "bits,poly",
        [(4, 0x13), (6, 0x43), (8, 0x12D), (10, 0x409), (12, 0x1069)],
    )
    def test_field_by_codeword_size(self, bits: int, poly: int) -> None:
        data = [1, 2, 3, 4]
        expected = encoder(poly, 6, 1).encode_message(data)
        assert aztec_error_correction(data, codeword_bits=bits, ecc=6) == expected

    def test_mode_message_compact(self) -> None:
        assert aztec_error_correction([1, 9], codeword_bits=4, ecc=5) == [1, 9, 1, 14, 14, 5, 2]

    def test_unknown_codeword_size(self) -> None:
        with pytest.raises(CodeParameterError, match="codeword size"):
            aztec_error_correction([1, 2], codeword_bits=7, ecc=3)

    def test_rune(self) -> None:
        assert aztec_rune_error_correction(25) == [1, 9, 1, 14, 14, 5, 2]

    @pytest.mark.parametrize("value", [0, 255])
    def test_rune_limits(self, value: int) -> None:
        stream = aztec_rune_error_correction(value)
        assert len(stream) == 7
        assert all(0 <= word <= 15 for word in stream)

    @pytest.mark.parametrize("value", [-1, 256])
    def test_rune_out_of_range(self, value: int) -> None:
        with pytest.raises(CodeParameterError):
            aztec_rune_error_correction(value)


class TestMaxiCode:
    def test_layout(self) -> None:
        primary = [2, 60, 11, 27, 40, 1, 0, 33, 18, 5]
        secondary = [10, 20, 30, 40, 50, 60]
        stream = maxicode_error_correction(primary, secondary, secondary_ecc=4)

        rs_primary = encoder(0x43, 10, 1)
        rs_secondary = encoder(0x43, 2, 1)
        assert len(stream) == 10 + 10 + 6 + 4
        assert stream[:20] == rs_primary.encode_message(primary)
        assert stream[20:26] == secondary
        assert stream[26::2] == rs_secondary.check_symbols([10, 30, 50])
        assert stream[27::2] == rs_secondary.check_symbols([20, 40, 60])

    def test_odd_secondary(self) -> None:
        with pytest.raises(CodeParameterError, match="even"):
            maxicode_error_correction([0] * 10, [1, 2, 3], secondary_ecc=4)

    def test_odd_check_count(self) -> None:
        with pytest.raises(CodeParameterError):
            maxicode_error_correction([0] * 10, [1, 2], secondary_ecc=3)


def _grid_matrix_interleave(
    data: List[int], n1: int, b1: int, b2: int, e1: int, b3: int, e2: int
) -> List[int]:
    """Straight block-by-block rendition of the Grid Matrix codeword layout."""
    total = b1 + b2
    word = [0] * (b1 * n1 + b2 * (n1 - 1))
    wp = 0
    for i in range(total):
        block_size = n1 if i < b1 else n1 - 1
        ecc_size = e1 if i < b3 else e2
        data_size = block_size - ecc_size
        block = data[wp : wp + data_size]
        wp += data_size
        register = encoder(0x89, ecc_size, 1).encode(block)
        block = block + [register[ecc_size - j - 1] for j in range(ecc_size)]
        for j in range(n1 - 1):
            word[total * j + i] = block[j]
        if block_size == n1:
            word[total * (n1 - 1) + i] = block[n1 - 1]
    return word


class TestGridMatrix:
    def test_single_block(self) -> None:
        assert grid_matrix_error_correction([10, 20, 30, 40, 50], 9, 1, 0, 4, 1) == [
            10, 20, 30, 40, 50, 35, 91, 120, 54,
        ]

    def test_two_blocks_interleaved(self) -> None:
        rs = encoder(0x89, 2, 1)
        c0 = rs.check_symbols([1, 2])
        c1 = rs.check_symbols([3, 4])
        assert grid_matrix_error_correction([1, 2, 3, 4], 4, 2, 0, 2, 2) == [
            1, 3, 2, 4, c0[0], c1[0], c0[1], c1[1],
        ]

    @pytest.mark.parametrize(
        "n1, b1, b2, e1, b3, e2, data_length",
        [
            # version 4, level 1
            (81, 2, 0, 8, 2, 0, 146),
            # version 6, level 2: two long blocks, one short, mixed check counts
            (113, 2, 1, 23, 1, 22, 271),
            # version 13, level 1
            (122, 6, 6, 13, 1, 12, 1313),
        ],
    )
    def test_matches_block_layout(
        self,
        n1: int,
        b1: int,
        b2: int,
        e1: int,
        b3: int,
        e2: int,
        data_length: int,
    ) -> None:
        data = [(i * 37 + 11) % 128 for i in range(data_length)]
        stream = grid_matrix_error_correction(data, n1, b1, b2, e1, b3, e2)
        assert stream == _grid_matrix_interleave(data, n1, b1, b2, e1, b3, e2)
        assert len(stream) == b1 * n1 + b2 * (n1 - 1)

    def test_stream_differs_from_single_block(self) -> None:
        data = [(i * 5) % 128 for i in range(146)]
        stream = grid_matrix_error_correction(data, 81, 2, 0, 8, 2)
        # column-wise readout: the second codeword comes from the second block
        assert stream[0] == data[0]
        assert stream[1] == data[73]

    def test_shares_cached_encoders(self) -> None:
        cache = EncoderCache()
        grid_matrix_error_correction([1] * 271, 113, 2, 1, 23, 1, 22, cache=cache)
        stats = cache.stats()
        assert stats.fields == 1
        assert stats.encoders == 2
        assert stats.hits == 1

    def test_data_length_mismatch(self) -> None:
        with pytest.raises(CodeParameterError, match="data codewords"):
            grid_matrix_error_correction([1, 2, 3], 4, 2, 0, 2, 2)

    def test_too_many_checks(self) -> None:
        with pytest.raises(CodeParameterError, match="cannot carry"):
            grid_matrix_error_correction([1, 2], 4, 1, 0, 4, 1)

    def test_invalid_block_counts(self) -> None:
        with pytest.raises(CodeParameterError):
            grid_matrix_error_correction([1, 2], 4, 0, 1, 1, 1)
        with pytest.raises(CodeParameterError):
            grid_matrix_error_correction([1, 2], 4, 1, 0, 2, 3)


class TestPostalAndOthers:
    def test_australia_post(self) -> None:
        assert australia_post_error_correction(list(range(1, 15))) == [27, 13, 41, 13]

    def test_australia_post_shares_cache(self) -> None:
        cache = EncoderCache()
        australia_post_error_correction([1, 2, 3], cache=cache)
        maxicode_error_correction([0] * 10, [0, 0], secondary_ecc=4, cache=cache)
        # both run over x^6 + x + 1
        assert cache.stats().fields == 1

    def test_code_one_s(self) -> None:
        assert code_one_s_error_correction([1, 2, 3]) == [1, 2, 3, 27, 28, 6]

    def test_code_one_t(self) -> None:
        assert code_one_t_error_correction([142, 164, 186], ecc=5) == [
            142, 164, 186, 114, 25, 5, 88, 102,
        ]

    def test_code_one_blocks(self) -> None:
        data = [5, 6, 7, 8]
        stream = code_one_error_correction(data, blocks=2, ecc_per_block=2)
        rs = encoder(0x12D, 2, 0)
        r0 = rs.encode([5, 7])
        r1 = rs.encode([6, 8])
        assert stream == data + [r1[1], r0[1], r1[0], r0[0]]

    def test_code_one_single_block_is_systematic(self) -> None:
        data = [1, 2, 3, 4, 5]
        assert code_one_error_correction(data, blocks=1, ecc_per_block=3) == (
            encoder(0x12D, 3, 0).encode_message(data)
        )

    def test_code_one_uneven_blocks(self) -> None:
        with pytest.raises(CodeParameterError, match="evenly"):
            code_one_error_correction([1, 2, 3], blocks=2, ecc_per_block=2)
