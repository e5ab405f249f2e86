"""
GF(2) vector helpers for bit-packed words.

A word of length n is a plain int: bit i holds the coefficient of x^i, so bit 0
is the constant term. Addition is XOR and multiplication is AND. Matrices are
sequences of such words, one per row.

Some derivations list rows high-degree first while bits are numbered
low-degree first. Every place that bridges the two goes through
reverse_index() so the convention lives in one spot.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Set, Tuple


Word = int
Matrix = Tuple[Word, ...]


def reverse_index(i: int, size: int) -> int:
    return size - 1 - i


def _mask(length: int) -> int:
    return (1 << length) - 1


def power(base: int, exponent: int) -> int:
    """Integer power by repeated multiplication (exponent 0 -> 1)."""
    if exponent < 0:
        raise ValueError(f"exponent must be non-negative, got {exponent}")
    result = 1
    for _ in range(exponent):
        result *= base
    return result


def positions(word: Word, length: int) -> List[int]:
    """Return the set-bit positions of word within the low `length` bits, ascending."""
    return [i for i in range(length) if (word >> i) & 1]


def word_from_positions(places: Iterable[int]) -> Word:
    word = 0
    for p in set(places):
        word += power(2, p)
    return word


def dot(a: Word, b: Word, length: int) -> int:
    """GF(2) dot product of the low `length` bits of a and b (0 or 1)."""
    return bin(a & b & _mask(length)).count("1") & 1


def hamming_distance(a: Word, b: Word, length: int) -> int:
    return bin((a ^ b) & _mask(length)).count("1")


def hamming_weight(v: Word, length: int) -> int:
    return hamming_distance(0, v, length)


def bit_rows(matrix: Sequence[Word], length: int) -> List[List[int]]:
    """Return the matrix as rows of bits, LSB (x^0) first."""
    return [[(row >> c) & 1 for c in range(length)] for row in matrix]


def transpose(matrix: Sequence[Word], code_length: int) -> List[Word]:
    """Transpose an r x code_length matrix into code_length rows of r bits.

    Input row i, bit c lands in output row reverse_index(c, code_length), bit
    reverse_index(i, r). Both axes flip, so transposing the result again with
    width r gives back the input exactly.
    """
    r = len(matrix)
    out: List[Word] = [0] * code_length
    for i, row in enumerate(matrix):
        place_value = reverse_index(i, r)
        for c in positions(row, code_length):
            out[reverse_index(c, code_length)] |= 1 << place_value
    return out


def rotate(word: Word, amount: int, length: int) -> Word:
    """Multiply word by x^amount modulo x^length - 1 (cyclic shift toward high bits)."""
    if length <= 0:
        return 0
    amount %= length
    return word_from_positions((p + amount) % length for p in positions(word, length))


def cyclic_shifts(word: Word, length: int) -> List[Word]:
    """All `length` cyclic shifts of word; index i is x^i * word mod (x^length - 1)."""
    return [rotate(word, i, length) for i in range(length)]


def burst_length(v: Word, length: int) -> int:
    """Shortest cyclic window (in bits) that covers every set bit of v.

    Computed as the minimum over all rotations of highest - lowest + 1. The zero
    vector has burst length 0.
    """
    best = 0
    for shifted in cyclic_shifts(v, length):
        places = positions(shifted, length)
        if not places:
            return 0
        span = places[-1] - places[0] + 1
        if best == 0 or span < best:
            best = span
    return best


def enumerate_cyclic_bursts(length: int, max_length: int) -> List[Word]:
    """Enumerate every nonzero error pattern with cyclic burst length <= max_length.

    A burst of span L starting at s has both s and s+L-1 (mod length) in error;
    the L-2 interior positions may take any value, giving 2^(L-2) variants per
    window. Spans longer than the word are clipped to the word length. Patterns
    are returned sorted by weight, then by value.
    """
    span_limit = min(max_length, length)
    patterns: Set[Word] = set()
    for span in range(1, span_limit + 1):
        for start in range(length):
            first = 1 << start
            last = 1 << ((start + span - 1) % length)
            interior = [(start + j) % length for j in range(1, span - 1)]
            for mask in range(1 << len(interior)):
                pat = first | last
                for j, idx in enumerate(interior):
                    if mask & (1 << j):
                        pat |= 1 << idx
                patterns.add(pat)
    return sorted(patterns, key=lambda ev: (hamming_weight(ev, length), ev))
