"""
Cryptoscope
Repeating-key XOR cryptanalysis and manual CBC mode over an ECB primitive

Modules:
- core.byte_utils: XOR helpers and Hamming distance
- core.text_scorer: English character-frequency scoring
- core.xor_breaker: single-byte solver, key-size estimator, repeating-key breaker
- core.cbc: ECB and CBC modes over a pluggable block primitive (AES by default)
- core.ecb_detector: repeated-block ECB detection
- core.engine: configuration-driven orchestration
"""

__version__ = "1.0.0"

from .core.errors import (
    CryptoscopeError, LengthMismatchError, InvalidLengthError, InvalidBlockAlignmentError,
    PrimitiveError, EncryptionFailedError, DecryptionFailedError, KeyRecoveryFailedError
)
from .core.byte_utils import (
    xor_scalar, xor_sequence, fixed_xor, repeating_key_xor, hamming_distance, chunks, transpose
)
from .core.text_scorer import CHAR_FREQUENCIES, score_text, score_bytes
from .core.xor_breaker import (
    ScoredKey, KeySizeScore, BreakResult, SingleXorDetection, XORBreaker,
    solve_single_byte_xor, detect_single_byte_xor, score_key_size, rank_key_sizes,
    recover_key_for_size, break_repeating_key_xor
)
from .core.cbc import (
    BLOCK_SIZE, EcbPrimitive, AesEcbPrimitive, CipherContext, CBCChainer, cbc_encrypt, cbc_decrypt,
    ecb_encrypt, ecb_decrypt
)
from .core.ecb_detector import repeats_blocks, count_repeated_blocks, detect_ecb
from .core.presets import AnalysisConfig, PresetLibrary
from .core.engine import CryptoscopeEngine


__all__ = [
    # Errors
    'CryptoscopeError',
    'LengthMismatchError',
    'InvalidLengthError',
    'InvalidBlockAlignmentError',
    'PrimitiveError',
    'EncryptionFailedError',
    'DecryptionFailedError',
    'KeyRecoveryFailedError',

    # Byte utilities
    'xor_scalar',
    'xor_sequence',
    'fixed_xor',
    'repeating_key_xor',
    'hamming_distance',
    'chunks',
    'transpose',

    # Scoring
    'CHAR_FREQUENCIES',
    'score_text',
    'score_bytes',

    # XOR analysis
    'ScoredKey',
    'KeySizeScore',
    'BreakResult',
    'SingleXorDetection',
    'XORBreaker',
    'solve_single_byte_xor',
    'detect_single_byte_xor',
    'score_key_size',
    'rank_key_sizes',
    'recover_key_for_size',
    'break_repeating_key_xor',

    # CBC / ECB
    'BLOCK_SIZE',
    'EcbPrimitive',
    'AesEcbPrimitive',
    'CipherContext',
    'CBCChainer',
    'cbc_encrypt',
    'cbc_decrypt',
    'ecb_encrypt',
    'ecb_decrypt',
    'repeats_blocks',
    'count_repeated_blocks',
    'detect_ecb',

    # Configuration / engine
    'AnalysisConfig',
    'PresetLibrary',
    'CryptoscopeEngine',
]
