"""
XOR Cryptanalysis
Single-byte XOR solving, key-size estimation and repeating-key XOR breaking
using English frequency scoring and normalized Hamming distance
"""

import heapq
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, TypeVar

from .byte_utils import hamming_distance, repeating_key_xor, transpose, xor_scalar
from .errors import InvalidLengthError, KeyRecoveryFailedError
from .text_scorer import score_bytes

T = TypeVar('T')

DEFAULT_KEY_SIZES = range(2, 40)


@dataclass(frozen=True)
class ScoredKey:
    """Result of testing one single-byte key"""
    key: int
    score: int


@dataclass(frozen=True)
class KeySizeScore:
    """Normalized Hamming score for a candidate key size (lower is better)"""
    key_size: int
    score: float


@dataclass(frozen=True)
class SingleXorDetection:
    """Best single-byte XOR candidate found among several inputs"""
    index: int
    key: int
    score: int
    plaintext: bytes


@dataclass
class BreakResult:
    """Outcome of breaking a repeating-key XOR ciphertext"""
    key: bytes
    key_size: int
    plaintext: bytes
    score: int
    key_size_scores: List[KeySizeScore] = field(default_factory=list)

    def to_dict(self) -> Dict:
        """Convert result to dictionary"""
        return {
            'key': self.key.decode('latin-1'),
            'key_hex': self.key.hex(),
            'key_size': self.key_size,
            'score': self.score,
            'plaintext': self.plaintext.decode('utf-8', errors='replace'),
            'key_size_scores': [
                {'key_size': s.key_size, 'score': s.score} for s in self.key_size_scores
            ]
        }


def rank_candidates(domain: Iterable[T], scorer: Callable[[T], int], k: int = 1) -> List[Tuple[T, int]]:
    """
    Top-k reduction over a fixed candidate domain

    Every candidate is scored independently; results are ordered by
    descending score, ties by ascending candidate value.

    Args:
        domain: Candidates to evaluate
        scorer: Scoring function (higher is better)
        k: Number of results to keep

    Returns:
        Up to k (candidate, score) pairs, best first
    """
    scored = ((-scorer(candidate), candidate) for candidate in domain)
    return [(candidate, -neg) for neg, candidate in heapq.nsmallest(k, scored)]


def solve_single_byte_xor(data: bytes, encoding: str = 'utf-8') -> Optional[ScoredKey]:
    """
    Try all 256 single-byte keys and return the most English-like one

    Candidates that do not decode under `encoding` score 0.

    Args:
        data: Ciphertext XOR'd with one repeated byte
        encoding: Text encoding used to decode candidates

    Returns:
        Best ScoredKey, or None for empty input
    """
    if not data:
        return None

    best = rank_candidates(range(256), lambda k: score_bytes(xor_scalar(data, k), encoding))
    key, score = best[0]
    return ScoredKey(key=key, score=score)


def detect_single_byte_xor(lines: Sequence[bytes], encoding: str = 'utf-8') -> Optional[SingleXorDetection]:
    """
    Find which of several inputs was encrypted with single-byte XOR

    Args:
        lines: Candidate ciphertexts
        encoding: Text encoding used to decode candidates

    Returns:
        Detection for the best-scoring input (earliest wins ties), or None
    """
    best: Optional[SingleXorDetection] = None

    for index, line in enumerate(lines):
        scored = solve_single_byte_xor(line, encoding)
        if scored is None:
            continue
        if best is None or scored.score > best.score:
            best = SingleXorDetection(
                index=index,
                key=scored.key,
                score=scored.score,
                plaintext=xor_scalar(line, scored.key)
            )

    return best


def score_key_size(key_size: int, data: bytes) -> float:
    """
    Normalized Hamming distance between adjacent key-size blocks

    Args:
        key_size: Candidate key length (>= 1)
        data: Ciphertext, at least two blocks long

    Returns:
        Sum of adjacent block distances divided by chunk count and key size
    """
    if key_size < 1:
        raise InvalidLengthError(f"Key size must be positive: {key_size}")
    if len(data) < 2 * key_size:
        raise InvalidLengthError(
            f"Need at least {2 * key_size} bytes to score key size {key_size}, got {len(data)}"
        )

    chunk_count = len(data) // key_size
    total = 0
    for i in range(chunk_count - 1):
        first = data[i * key_size:(i + 1) * key_size]
        second = data[(i + 1) * key_size:(i + 2) * key_size]
        total += hamming_distance(first, second)

    return total / chunk_count / key_size


def rank_key_sizes(data: bytes, key_sizes: Iterable[int] = DEFAULT_KEY_SIZES) -> List[KeySizeScore]:
    """
    Score candidate key sizes, most likely first

    Sizes that do not fit the data twice are skipped.
    """
    scores = [
        KeySizeScore(key_size=size, score=score_key_size(size, data))
        for size in key_sizes
        if size >= 1 and len(data) >= 2 * size
    ]
    scores.sort(key=lambda s: (s.score, s.key_size))
    return scores


def recover_key_for_size(data: bytes, key_size: int, encoding: str = 'utf-8') -> bytes:
    """
    Recover a repeating XOR key of known length

    Args:
        data: Ciphertext
        key_size: Assumed key length
        encoding: Text encoding used to decode candidates

    Returns:
        Key bytes of length key_size
    """
    key = bytearray()
    for position, column in enumerate(transpose(data, key_size)):
        scored = solve_single_byte_xor(column, encoding)
        if scored is None:
            raise KeyRecoveryFailedError(
                f"Key position {position} yielded no candidate for key size {key_size}"
            )
        key.append(scored.key)
    return bytes(key)


class XORBreaker:
    """Break repeating-key XOR using Hamming distance and frequency analysis"""

    def __init__(self, key_sizes: Iterable[int] = DEFAULT_KEY_SIZES, candidates: int = 1,
                 encoding: str = 'utf-8'):
        """
        Args:
            key_sizes: Key lengths to consider
            candidates: How many of the best-ranked key sizes to try
            encoding: Text encoding used to decode candidates
        """
        self.key_sizes = list(key_sizes)
        self.candidates = max(candidates, 1)
        self.encoding = encoding

    def break_ciphertext(self, data: bytes) -> BreakResult:
        """
        Recover the key and plaintext of a repeating-key XOR ciphertext

        The best-ranked key sizes are tried in order; when several are
        tried, the one whose plaintext scores highest wins.
        """
        ranked = rank_key_sizes(data, self.key_sizes)
        if not ranked:
            raise KeyRecoveryFailedError(f"No candidate key size fits {len(data)} bytes")

        best: Optional[BreakResult] = None
        for entry in ranked[:self.candidates]:
            try:
                key = recover_key_for_size(data, entry.key_size, self.encoding)
            except KeyRecoveryFailedError:
                continue

            plaintext = repeating_key_xor(data, key)
            score = score_bytes(plaintext, self.encoding)
            if best is None or score > best.score:
                best = BreakResult(
                    key=key,
                    key_size=entry.key_size,
                    plaintext=plaintext,
                    score=score,
                    key_size_scores=ranked
                )

        if best is None:
            raise KeyRecoveryFailedError("Every candidate key size failed")

        return best


def break_repeating_key_xor(data: bytes, key_sizes: Iterable[int] = DEFAULT_KEY_SIZES,
                            candidates: int = 1, encoding: str = 'utf-8') -> bytes:
    """Recover the repeating XOR key; apply repeating_key_xor to get plaintext"""
    return XORBreaker(key_sizes, candidates, encoding).break_ciphertext(data).key
