"""
Block Modes
ECB and Cipher Block Chaining built block-by-block on top of an ECB primitive

ECB:         C[i] = E(key, P[i])
Encryption:  C[i] = E(key, C[i-1] ^ P[i]),  C[-1] = IV
Decryption:  P[i] = D(key, C[i]) ^ C[i-1],  C[-1] = IV
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

from Crypto.Cipher import AES

from .byte_utils import fixed_xor
from .errors import (
    DecryptionFailedError, EncryptionFailedError, InvalidBlockAlignmentError, PrimitiveError
)

BLOCK_SIZE = 16


class EcbPrimitive(ABC):
    """Stateless single-block cipher transform (no padding, no chaining)"""

    block_size: int = BLOCK_SIZE

    @abstractmethod
    def encrypt_block(self, key: bytes, block: bytes) -> bytes:
        """Encrypt exactly one block"""
        pass

    @abstractmethod
    def decrypt_block(self, key: bytes, block: bytes) -> bytes:
        """Decrypt exactly one block"""
        pass


class AesEcbPrimitive(EcbPrimitive):
    """AES in ECB mode via pycryptodome"""

    block_size = AES.block_size

    def encrypt_block(self, key: bytes, block: bytes) -> bytes:
        try:
            return AES.new(key, AES.MODE_ECB).encrypt(block)
        except (ValueError, TypeError) as e:
            raise PrimitiveError(f"AES rejected input: {e}") from e

    def decrypt_block(self, key: bytes, block: bytes) -> bytes:
        try:
            return AES.new(key, AES.MODE_ECB).decrypt(block)
        except (ValueError, TypeError) as e:
            raise PrimitiveError(f"AES rejected input: {e}") from e


def _split_blocks(data: bytes, iv: Optional[bytes], block_size: int) -> List[bytes]:
    """Check alignment and split data into blocks (iv=None skips the IV check)"""
    if block_size < 1:
        raise InvalidBlockAlignmentError(f"Block size must be positive: {block_size}")
    if len(data) % block_size != 0:
        raise InvalidBlockAlignmentError(
            f"Input length {len(data)} is not a multiple of block size {block_size}"
        )
    if iv is not None and len(iv) != block_size:
        raise InvalidBlockAlignmentError(
            f"IV length {len(iv)} does not match block size {block_size}"
        )
    return [data[i:i + block_size] for i in range(0, len(data), block_size)]


def ecb_encrypt(plain: bytes, key: bytes, primitive: Optional[EcbPrimitive] = None,
                block_size: int = BLOCK_SIZE) -> bytes:
    """
    Encrypt block-aligned plaintext in ECB mode

    Each block is encrypted independently, so equal plaintext blocks give
    equal ciphertext blocks.

    Args:
        plain: Plaintext, length a multiple of block_size
        key: Cipher key
        primitive: ECB primitive (AES by default)
        block_size: Cipher block size

    Returns:
        Ciphertext of the same length
    """
    primitive = primitive or AesEcbPrimitive()
    output = []
    for index, block in enumerate(_split_blocks(plain, None, block_size)):
        try:
            output.append(primitive.encrypt_block(key, block))
        except PrimitiveError as e:
            raise EncryptionFailedError(f"Block {index}: {e}") from e
    return b''.join(output)


def ecb_decrypt(cipher: bytes, key: bytes, primitive: Optional[EcbPrimitive] = None,
                block_size: int = BLOCK_SIZE) -> bytes:
    """Decrypt block-aligned ciphertext in ECB mode"""
    primitive = primitive or AesEcbPrimitive()
    output = []
    for index, block in enumerate(_split_blocks(cipher, None, block_size)):
        try:
            output.append(primitive.decrypt_block(key, block))
        except PrimitiveError as e:
            raise DecryptionFailedError(f"Block {index}: {e}") from e
    return b''.join(output)


def cbc_encrypt(plain: bytes, key: bytes, iv: bytes, primitive: Optional[EcbPrimitive] = None,
                block_size: int = BLOCK_SIZE) -> bytes:
    """
    Encrypt block-aligned plaintext in CBC mode

    Padding is the caller's responsibility. Blocks are processed strictly
    in order since each depends on the previous ciphertext block.

    Args:
        plain: Plaintext, length a multiple of block_size
        key: Cipher key
        iv: Initialization vector, one block long
        primitive: ECB primitive (AES by default)
        block_size: Cipher block size

    Returns:
        Ciphertext of the same length
    """
    primitive = primitive or AesEcbPrimitive()
    blocks = _split_blocks(plain, iv, block_size)

    output = []
    previous = iv
    for index in range(len(blocks)):
        try:
            previous = primitive.encrypt_block(key, fixed_xor(previous, blocks[index]))
        except PrimitiveError as e:
            raise EncryptionFailedError(f"Block {index}: {e}") from e
        output.append(previous)

    return b''.join(output)


def cbc_decrypt(cipher: bytes, key: bytes, iv: bytes, primitive: Optional[EcbPrimitive] = None,
                block_size: int = BLOCK_SIZE) -> bytes:
    """
    Decrypt block-aligned ciphertext in CBC mode

    Args:
        cipher: Ciphertext, length a multiple of block_size
        key: Cipher key
        iv: Initialization vector, one block long
        primitive: ECB primitive (AES by default)
        block_size: Cipher block size

    Returns:
        Plaintext of the same length (still padded, if it was)
    """
    primitive = primitive or AesEcbPrimitive()
    blocks = _split_blocks(cipher, iv, block_size)

    output = []
    for index in range(len(blocks)):
        previous = blocks[index - 1] if index > 0 else iv
        try:
            decrypted = primitive.decrypt_block(key, blocks[index])
        except PrimitiveError as e:
            raise DecryptionFailedError(f"Block {index}: {e}") from e
        output.append(fixed_xor(decrypted, previous))

    return b''.join(output)


@dataclass(frozen=True)
class CipherContext:
    """Key, IV and primitive for one CBC operation"""
    key: bytes
    iv: bytes
    block_size: int = BLOCK_SIZE
    primitive: EcbPrimitive = field(default_factory=AesEcbPrimitive)


class CBCChainer:
    """CBC encryption/decryption bound to a CipherContext"""

    def __init__(self, context: CipherContext):
        self.context = context

    def encrypt(self, plain: bytes) -> bytes:
        ctx = self.context
        return cbc_encrypt(plain, ctx.key, ctx.iv, ctx.primitive, ctx.block_size)

    def decrypt(self, cipher: bytes) -> bytes:
        ctx = self.context
        return cbc_decrypt(cipher, ctx.key, ctx.iv, ctx.primitive, ctx.block_size)
