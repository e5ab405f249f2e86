"""
Binary cyclic code construction, encoder and decoders.

Summary
-------
A CyclicCode is built from a generator matrix G (k rows) and a parity-check
matrix H (n-k rows) over GF(2), all rows packed as ints with bit i = x^i. The
codeword set is the null space of H, found by scanning every n-bit word, so n
is limited to MAX_CODE_LENGTH.

Encoding XORs the rows of G picked by the message bits (bit i picks row k-1-i).

Decoding computes the syndrome of every cyclic shift x^i * r of the received
word r. When some shift moves the whole error into the n-k high-order
positions, its syndrome *is* that shifted error; left-aligning it and
multiplying by x^(n-i) recovers the error pattern. Two policies decide which
syndrome to trust:

- BurstTrapping(max_burst): prefers the syndrome whose burst length is the
  largest value <= max_burst (lowest shift index on ties). Nothing usable ->
  decode fails and the received word comes back untouched.
- BoundedDistance(): takes the first syndrome of weight <= (d-1)//2, otherwise
  falls back to nearest-neighbor (coset leader) decoding. Never fails.

Notes and scope
---------------
- Trapping assumes a systematic H whose high-order n-k columns form the
  anti-diagonal identity, so the syndrome of x^(n-r+j) is bit j. The example
  factories build H in that shape. Results are always re-checked with
  is_code_word and reported as not ok when the check fails.
- decode() returns (word, ok, error_pattern). Failure is a normal outcome and
  is never raised as an exception.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Dict, List, Optional, Sequence, Tuple, Union

from gf2_vectors import (
    Matrix,
    Word,
    bit_rows,
    burst_length,
    cyclic_shifts,
    dot,
    enumerate_cyclic_bursts,
    hamming_weight,
    positions,
    power,
    reverse_index,
    rotate,
    transpose,
)

log = logging.getLogger(__name__)

DEFAULT_MAX_BURST = 3
MAX_CODE_LENGTH = 24

DecodeResult = Tuple[Word, bool, Optional[Word]]


class InvalidDimensions(ValueError):
    """Generator/parity-check matrices do not describe a length-n code."""


@dataclass(frozen=True)
class BurstTrapping:
    max_burst: int = DEFAULT_MAX_BURST

    def __post_init__(self) -> None:
        if not isinstance(self.max_burst, int) or self.max_burst < 0:
            raise ValueError(f"max_burst must be a non-negative int, got {self.max_burst!r}")


@dataclass(frozen=True)
class BoundedDistance:
    pass


@dataclass(frozen=True)
class NearestNeighbor:
    pass


DecodePolicy = Union[BurstTrapping, BoundedDistance, NearestNeighbor]


def minimum_distance(code_words: Sequence[Word], code_length: int) -> Optional[int]:
    """Smallest weight among nonzero codewords, or None if there are none."""
    distance: Optional[int] = None
    for word in code_words:
        if word == 0:
            continue
        w = hamming_weight(word, code_length)
        if distance is None or w < distance:
            distance = w
    return distance


@dataclass(frozen=True)
class CyclicCode:
    code_length: int
    generator: Matrix
    parity_check: Matrix
    code_words: Tuple[Word, ...]
    min_distance: Optional[int]
    parity_transpose: Tuple[Word, ...] = field(repr=False, compare=False, default=())
    message_table: Dict[Word, int] = field(repr=False, compare=False, default_factory=dict)

    @property
    def n(self) -> int:
        return self.code_length

    @property
    def k(self) -> int:
        return len(self.generator)

    @property
    def r(self) -> int:
        return len(self.parity_check)

    def _check_word(self, word: Word) -> None:
        if word < 0 or word >> self.code_length:
            raise ValueError(f"Expected a {self.code_length}-bit word, got {word}")

    def is_code_word(self, word: Word) -> bool:
        for row in self.parity_check:
            if dot(word, row, self.code_length) != 0:
                return False
        return True

    def encode(self, message: Word) -> Word:
        if message < 0 or message >> self.k:
            raise ValueError(f"Expected a {self.k}-bit message, got {message}")
        encoded = 0
        for place_value in range(self.k):
            if (message >> place_value) & 1:
                encoded ^= self.generator[reverse_index(place_value, self.k)]
        return encoded

    def message_of(self, word: Word) -> Optional[int]:
        """Return the message that encodes to word, or None if word is not an encoding."""
        return self.message_table.get(word)

    # --- Syndromes ---
    def syndrome(self, word: Word) -> Word:
        """Syndrome H * word^T; bit reverse_index(i, r) is the check of parity row i."""
        s = 0
        for place_value in positions(word, self.code_length):
            s ^= self.parity_transpose[reverse_index(place_value, self.code_length)]
        return s

    def syndromes(self, received: Word) -> List[Word]:
        """Syndromes of x^i * received for i = 0..n-1, index-aligned with i."""
        return [self.syndrome(shift) for shift in cyclic_shifts(received, self.code_length)]

    def _trapped_error(self, index: int, syndrome: Word) -> Word:
        # Syndrome bits sit in the high-order r positions of x^index * error.
        aligned = syndrome << (self.code_length - self.r)
        return rotate(aligned, (self.code_length - index) % self.code_length, self.code_length)

    # --- Decoding ---
    def decode(self, received: Word, policy: DecodePolicy = BoundedDistance()) -> DecodeResult:
        """Decode received with the given policy.

        Returns (word, ok, error_pattern):
          - ok=True when word is a codeword; error_pattern is None if nothing changed.
          - ok=False with (received, None) when burst trapping finds no usable syndrome.
          - ok=False with the applied pattern when the result fails is_code_word.
        """
        self._check_word(received)
        if isinstance(policy, BurstTrapping):
            error = self._burst_trapping_error(received, policy.max_burst)
            if error is None:
                log.warning(
                    f"Word {received:0{self.code_length}b} --failed to decode "
                    f"(no syndrome with burst length <= {policy.max_burst})."
                )
                return received, False, None
        elif isinstance(policy, BoundedDistance):
            error = self._bounded_distance_error(received)
            if error is None:
                error = received ^ self.nearest_neighbor(received)
        elif isinstance(policy, NearestNeighbor):
            error = received ^ self.nearest_neighbor(received)
        else:
            raise TypeError(f"Unsupported decode policy {policy!r}")

        decoded = received ^ error
        ev = error if error else None
        if not self.is_code_word(decoded):
            log.warning(
                f"Word {received:0{self.code_length}b} --decoded to non-codeword "
                f"{decoded:0{self.code_length}b} (error pattern {error:0{self.code_length}b})."
            )
            return decoded, False, ev
        log.debug(f"Word {received:0{self.code_length}b} --decoded successfully.")
        return decoded, True, ev

    def _burst_trapping_error(self, received: Word, max_burst: int) -> Optional[Word]:
        syndromes = self.syndromes(received)
        # Burst length of each syndrome as it would sit in the word (aligned high).
        bursts = [
            burst_length(s << (self.code_length - self.r), self.code_length) for s in syndromes
        ]
        for desired in range(max_burst, -1, -1):
            for index, b in enumerate(bursts):
                if b == desired:
                    return self._trapped_error(index, syndromes[index])
        return None

    def _bounded_distance_error(self, received: Word) -> Optional[Word]:
        if self.min_distance is None:
            return None
        bound = (self.min_distance - 1) // 2
        for index, s in enumerate(self.syndromes(received)):
            if hamming_weight(s, self.r) <= bound:
                return self._trapped_error(index, s)
        return None

    def nearest_neighbor(self, received: Word) -> Word:
        """Nearest codeword by coset-leader search (first minimum in code_words order)."""
        coset = [received ^ c for c in self.code_words]
        error_word = coset[0]
        least_hw: Optional[int] = None
        for candidate in coset:
            hw = hamming_weight(candidate, self.code_length)
            if least_hw is None or hw < least_hw:
                least_hw = hw
                error_word = candidate
        log.debug(f"Word {received:0{self.code_length}b} --used nearest-neighbor decoding.")
        return received ^ error_word

    def decode_to_message(self, received: Word, policy: DecodePolicy = BoundedDistance()) -> Tuple[Optional[int], bool, Optional[Word]]:
        """Decode, then map the codeword back to its message.

        Returns (message, ok, error_pattern); message is None when the decoded
        word is not the encoding of any message.
        """
        decoded, ok, ev = self.decode(received, policy)
        message = self.message_of(decoded)
        return message, ok and message is not None, ev

    # --- Burst capability ---
    def burst_correcting_capability(self) -> int:
        """Largest B such that all cyclic bursts of length <= B have distinct nonzero syndromes."""
        capability = 0
        for limit in range(1, self.code_length + 1):
            seen: Dict[Word, Word] = {}
            for ev in enumerate_cyclic_bursts(self.code_length, limit):
                s = self.syndrome(ev)
                if s == 0 or s in seen:
                    return capability
                seen[s] = ev
            capability = limit
        return capability

    # --- Matrix views ---
    def generator_bits(self) -> List[List[int]]:
        return bit_rows(self.generator, self.code_length)

    def parity_check_bits(self) -> List[List[int]]:
        """Return H as rows of bits, column c holding the coefficient of x^c."""
        return bit_rows(self.parity_check, self.code_length)

    def parity_check_numpy(self, dtype: Optional["np.dtype"] = None):  # type: ignore[name-defined]
        try:
            import numpy as np  # type: ignore
        except Exception as e:  # pragma: no cover - runtime environment
            raise RuntimeError("NumPy is required for parity_check_numpy; please install numpy") from e
        return np.array(self.parity_check_bits(), dtype=dtype if dtype is not None else np.uint8)


def _validate(generator: Sequence[Word], parity_check: Sequence[Word], code_length: int) -> None:
    if not isinstance(code_length, int) or code_length < 1:
        raise InvalidDimensions(f"code_length must be a positive int, got {code_length!r}")
    if code_length > MAX_CODE_LENGTH:
        raise InvalidDimensions(
            f"code_length {code_length} exceeds {MAX_CODE_LENGTH}; exhaustive codeword search is not tractable"
        )
    if not generator:
        raise InvalidDimensions("generator matrix must have at least one row")
    if not parity_check:
        raise InvalidDimensions("parity-check matrix must have at least one row")
    if len(generator) + len(parity_check) != code_length:
        raise InvalidDimensions(
            f"k={len(generator)} generator rows and {len(parity_check)} parity-check rows "
            f"do not add up to code_length={code_length}"
        )
    for name, matrix in (("generator", generator), ("parity_check", parity_check)):
        for i, row in enumerate(matrix):
            if row < 0 or row >> code_length:
                raise InvalidDimensions(f"{name} row {i} ({row}) does not fit in {code_length} bits")


def construct(generator: Sequence[Word], parity_check: Sequence[Word], code_length: int) -> CyclicCode:
    """Build a CyclicCode, enumerating its codewords as the null space of parity_check."""
    _validate(generator, parity_check, code_length)
    generator = tuple(int(x) for x in generator)
    parity_check = tuple(int(x) for x in parity_check)

    probe = CyclicCode(
        code_length=code_length,
        generator=generator,
        parity_check=parity_check,
        code_words=(),
        min_distance=None,
    )
    code_words = tuple(w for w in range(power(2, code_length)) if probe.is_code_word(w))
    distance = minimum_distance(code_words, code_length)

    message_table: Dict[Word, int] = {}
    for message in range(power(2, probe.k)):
        message_table.setdefault(probe.encode(message), message)

    code = CyclicCode(
        code_length=code_length,
        generator=generator,
        parity_check=parity_check,
        code_words=code_words,
        min_distance=distance,
        parity_transpose=tuple(transpose(parity_check, code_length)),
        message_table=message_table,
    )
    log.info(
        f"CyclicCode(n={code.n},k={code.k},|C|={len(code_words)},d={distance})"
    )
    return code


def make_hamming_7_4() -> CyclicCode:
    """(7,4) cyclic Hamming code, g(x) = 1 + x + x^3, d = 3.

    Systematic layout: message bits at x^0..x^3, parity at x^4..x^6.
    """
    generator = [0b1011000, 0b1110100, 0b1100010, 0b0110001]
    parity_check = [0b1001110, 0b0100111, 0b0011101]
    return construct(generator, parity_check, 7)


def make_simplex_7_3() -> CyclicCode:
    """(7,3) cyclic simplex code, g(x) = 1 + x^2 + x^3 + x^4, d = 4.

    Every nonzero codeword has weight 4; corrects all cyclic bursts of length <= 2.
    """
    generator = [0b1110100, 0b0111010, 0b1101001]
    parity_check = [0b1000101, 0b0100111, 0b0010110, 0b0001011]
    return construct(generator, parity_check, 7)
