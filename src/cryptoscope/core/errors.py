"""
Error Taxonomy
Exceptions raised by the analysis and chaining modules

All errors are recoverable at the caller: the repeating-key XOR breaker can
retry other key sizes, and CBC failures abort the whole operation.
"""


class CryptoscopeError(Exception):
    """Base class for all Cryptoscope errors"""


class LengthMismatchError(CryptoscopeError, ValueError):
    """Operand lengths violate an operation's alignment requirement"""


class InvalidLengthError(LengthMismatchError):
    """Data or key length is unusable for the requested operation"""


class InvalidBlockAlignmentError(CryptoscopeError, ValueError):
    """Input length is not a multiple of the cipher block size"""


class PrimitiveError(CryptoscopeError):
    """The underlying block-cipher primitive rejected a key or block"""


class EncryptionFailedError(PrimitiveError):
    """A block could not be encrypted"""


class DecryptionFailedError(PrimitiveError):
    """A block could not be decrypted"""


class KeyRecoveryFailedError(CryptoscopeError):
    """No usable key could be recovered from the ciphertext"""
