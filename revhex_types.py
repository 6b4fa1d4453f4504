"""
Revhex Types & Constants - Reverse Hexadecimal Encoding
========================================================

Alphabet, lookup tables, sizing helpers, stream states and error classes
shared by the revhex encoder and decoder. This module has ZERO external
dependencies beyond the Python standard library.

Reverse hex is ordinary base-16 encoding with `z-k` standing in for
`0-9a-f`. Encoded output is lowercase; decoding accepts either case.
"""

from enum import IntEnum

# ═══════════════════════════════════════════════════════════════
# ALPHABET & LOOKUP TABLES
# ═══════════════════════════════════════════════════════════════

# Nibble value -> symbol. z=0, y=1, ... k=15
REVHEX_TABLE = "zyxwvutsrqponmlk"
REVHEX_BYTES = REVHEX_TABLE.encode('ascii')

# Marks a byte that is not a reverse hex symbol in either case
INVALID_NIBBLE = 0xFF


def _build_reverse_table() -> bytes:
    table = bytearray([INVALID_NIBBLE] * 256)
    for nibble, symbol in enumerate(REVHEX_TABLE):
        table[ord(symbol)] = nibble            # k-z  (0x6B-0x7A)
        table[ord(symbol.upper())] = nibble    # K-Z  (0x4B-0x5A)
    return bytes(table)


# Byte value -> nibble (0x00-0x0F) or INVALID_NIBBLE
REVERSE_REVHEX_TABLE = _build_reverse_table()


# ═══════════════════════════════════════════════════════════════
# STREAM CONFIGURATION
# ═══════════════════════════════════════════════════════════════

# Reverse hex characters buffered by RevhexEncoder / RevhexDecoder.
# Encoder flushes BUFFER_SIZE // 2 source bytes per sink write.
BUFFER_SIZE = 1024


def check_buffer_size(size: int) -> int:
    """Validate an adapter buffer size. Must be a positive even integer."""
    if not isinstance(size, int) or isinstance(size, bool):
        raise TypeError(f"buffer_size must be an int, got {type(size).__name__}")
    if size < 2 or size % 2:
        raise ValueError(f"buffer_size must be a positive even integer, got {size}")
    return size


# ═══════════════════════════════════════════════════════════════
# STREAM STATES
# ═══════════════════════════════════════════════════════════════

class StreamState(IntEnum):
    """Lifecycle of a RevhexDecoder. DRAINED and FAULTED are terminal."""
    IDLE      = 0  # Between reads, source still open
    FILLING   = 1  # Pulling encoded bytes from the source
    DECODING  = 2  # Turning buffered pairs into output bytes
    DRAINED   = 3  # Source ended cleanly, nothing pending
    FAULTED   = 4  # Sticky error recorded


# ═══════════════════════════════════════════════════════════════
# SIZING
# ═══════════════════════════════════════════════════════════════

def encoded_len(n: int) -> int:
    """Length of the encoding of n source bytes. Always n * 2."""
    return n * 2


def decoded_len(n: int) -> int:
    """Length of the decoding of n encoded bytes. Always n // 2."""
    return n // 2


def is_revhex_byte(b: int) -> bool:
    """True if byte value b is a reverse hex symbol (either case)."""
    return REVERSE_REVHEX_TABLE[b] <= 0x0F


# ═══════════════════════════════════════════════════════════════
# ERROR CLASSES
# ═══════════════════════════════════════════════════════════════

class RevhexError(Exception):
    """
    Base error for all revhex operations.

    Decoding errors record how far decoding got before failing:
      written : number of bytes decoded into the destination
      partial : those decoded bytes
    """

    def __init__(self, message: str, written: int = 0, partial: bytes = b''):
        super().__init__(message)
        self.written = written
        self.partial = partial


class InvalidByteError(RevhexError, ValueError):
    """A byte outside the reverse hex alphabet where a symbol was expected."""

    def __init__(self, byte: int, written: int = 0, partial: bytes = b''):
        super().__init__(f"revhex: invalid byte: {byte:#04x} ({chr(byte)!r})",
                         written, partial)
        self.byte = byte

    @property
    def char(self) -> str:
        return chr(self.byte)


class OddLengthError(RevhexError, ValueError):
    """One-shot decode of an odd-length input with a valid trailing symbol."""

    def __init__(self, written: int = 0, partial: bytes = b''):
        super().__init__("revhex: odd length reverse hex string", written, partial)


class UnexpectedEndOfStreamError(RevhexError, EOFError):
    """
    Streaming source closed on a dangling (valid) symbol.
    The stream counterpart of OddLengthError.
    """

    def __init__(self, written: int = 0, partial: bytes = b''):
        super().__init__("revhex: unexpected end of stream", written, partial)


class ShortWriteError(RevhexError, OSError):
    """Sink accepted fewer encoded bytes than it was handed."""

    def __init__(self, expected: int, actual: int):
        super().__init__(f"revhex: short write ({actual} of {expected} bytes)")
        self.expected = expected
        self.actual = actual
