import pytest

from gf2_vectors import (
    bit_rows,
    burst_length,
    cyclic_shifts,
    dot,
    hamming_distance,
    hamming_weight,
    positions,
    power,
    reverse_index,
    rotate,
    transpose,
    word_from_positions,
)

HAMMING_H = [0b1001110, 0b0100111, 0b0011101]
SIMPLEX_H = [0b1000101, 0b0100111, 0b0010110, 0b0001011]


def test_dot_product_is_parity_of_common_bits():
    assert dot(0b1011, 0b0110, 4) == 1
    assert dot(0b1111, 0b1111, 4) == 0
    # bit 4 lies outside the 4-bit window
    assert dot(0b10001, 0b10001, 4) == 1


def test_hamming_distance_and_weight():
    assert hamming_distance(0b1010, 0b0110, 4) == 2
    assert hamming_distance(0b10000, 0, 4) == 0
    assert hamming_distance(0b1010, 0b1010, 4) == 0
    assert hamming_weight(0b1111111, 7) == 7
    assert hamming_weight(0, 7) == 0


def test_hamming_distance_triangle_inequality():
    words = range(16)
    for a in words:
        for b in words:
            assert hamming_distance(a, b, 4) == hamming_distance(b, a, 4)
            for c in (0, 5, 10, 15):
                assert hamming_distance(a, c, 4) <= hamming_distance(a, b, 4) + hamming_distance(b, c, 4)


def test_power():
    assert power(2, 0) == 1
    assert power(0, 0) == 1
    assert power(2, 10) == 1024
    assert power(3, 4) == 81
    with pytest.raises(ValueError):
        power(2, -1)


def test_positions_and_back():
    assert positions(37, 7) == [0, 2, 5]
    assert word_from_positions([0, 2, 5]) == 37
    assert word_from_positions([]) == 0
    for w in range(128):
        assert word_from_positions(positions(w, 7)) == w


def test_reverse_index():
    assert reverse_index(0, 7) == 6
    assert reverse_index(6, 7) == 0
    assert reverse_index(1, 3) == 1


def test_bit_rows_lsb_first():
    assert bit_rows([0b101], 3) == [[1, 0, 1]]
    assert bit_rows([0b110, 0b001], 3) == [[0, 1, 1], [1, 0, 0]]


def test_cyclic_shifts_follow_powers_of_x():
    assert cyclic_shifts(0b0000011, 7) == [3, 6, 12, 24, 48, 96, 65]
    assert cyclic_shifts(0, 4) == [0, 0, 0, 0]
    assert len(cyclic_shifts(0b1, 5)) == 5


def test_rotate_wraps_and_composes():
    assert rotate(0b1000000, 1, 7) == 1
    assert rotate(0b0000001, 7, 7) == 1
    for w in (1, 11, 88, 127):
        for a in range(7):
            assert rotate(rotate(w, a, 7), 7 - a, 7) == w


def test_burst_length():
    assert burst_length(0, 7) == 0
    assert burst_length(0b0001000, 7) == 1
    assert burst_length(0b1000001, 7) == 2  # wraps around x^6 -> x^0
    assert burst_length(0b0000101, 7) == 3
    assert burst_length(0b1011000, 7) == 4
    assert burst_length(0b1111111, 7) == 7


def test_transpose_hamming_parity_check():
    # Row reverse_index(c) of the transpose holds column c of H, rows of H read top-down as MSB..LSB.
    assert transpose(HAMMING_H, 7) == [4, 2, 1, 5, 7, 6, 3]
    assert transpose([0b110], 3) == [1, 1, 0]


@pytest.mark.parametrize("matrix,width", [
    (HAMMING_H, 7),
    (SIMPLEX_H, 7),
    ([0b110], 3),
    ([0b1, 0b10, 0b100, 0b1000], 4),
])
def test_transpose_round_trip(matrix, width):
    t = transpose(matrix, width)
    assert len(t) == width
    assert transpose(t, len(matrix)) == list(matrix)
