"""
Revhex Decoder - Reverse Hexadecimal Decoding
==============================================

Decodes reverse hex text back to bytes, two symbols per byte, accepting
upper- and lowercase symbols interchangeably.

  - decode()         : into a caller-supplied buffer
  - append_decode()  : onto a growable bytearray
  - decode_string()  : into new bytes
  - RevhexDecoder    : readable stream wrapping a byte source

Malformed input raises a RevhexError subclass. Bytes decoded before the
failure are kept on the error (`written`, `partial`):

  InvalidByteError            byte outside the alphabet (either case)
  OddLengthError              one-shot input ends on an unpaired symbol
  UnexpectedEndOfStreamError  stream source ends on an unpaired symbol

Within a pair the high symbol is checked first, and an invalid trailing
symbol is reported as InvalidByteError rather than a length error.
"""

import io
import logging
from typing import Optional

from revhex_types import (
    REVERSE_REVHEX_TABLE, BUFFER_SIZE, StreamState,
    RevhexError, InvalidByteError, OddLengthError, UnexpectedEndOfStreamError,
    decoded_len, is_revhex_byte, check_buffer_size,
)

logger = logging.getLogger(__name__)


def _as_bytes(src):
    if isinstance(src, str):
        return src.encode('utf-8')
    return memoryview(src).cast('B')


# ═══════════════════════════════════════════════════════════════
# ONE-SHOT DECODING
# ═══════════════════════════════════════════════════════════════

def decode(dst, src) -> int:
    """
    Decode src into dst, returning the number of bytes written.

    Args:
        dst: Writable buffer, at least decoded_len(len(src)) long.
        src: Reverse hex input, bytes-like or str.

    Returns:
        Bytes written to dst, decoded_len(len(src)) on success.

    Raises:
        InvalidByteError, OddLengthError: with `written` set to the
        number of bytes already decoded into dst.
    """
    src = _as_bytes(src)
    i, j = 0, 1
    while j < len(src):
        p = src[j - 1]
        q = src[j]

        a = REVERSE_REVHEX_TABLE[p]
        b = REVERSE_REVHEX_TABLE[q]
        if a > 0x0F:
            raise InvalidByteError(p, i, bytes(dst[:i]))
        if b > 0x0F:
            raise InvalidByteError(q, i, bytes(dst[:i]))
        dst[i] = (a << 4) | b
        i += 1
        j += 2

    if len(src) % 2 == 1:
        # An invalid trailing symbol is the earlier problem
        last = src[j - 1]
        if REVERSE_REVHEX_TABLE[last] > 0x0F:
            raise InvalidByteError(last, i, bytes(dst[:i]))
        raise OddLengthError(i, bytes(dst[:i]))
    return i


def append_decode(dst: bytearray, src) -> bytearray:
    """
    Append the bytes decoded from src to dst and return dst.

    On malformed input dst is extended with the partial decode before
    the error propagates.
    """
    src = _as_bytes(src)
    out = bytearray(decoded_len(len(src)))
    try:
        n = decode(out, src)
    except RevhexError as e:
        dst.extend(out[:e.written])
        raise
    dst.extend(out[:n])
    return dst


def decode_string(s) -> bytes:
    """
    Return the bytes represented by the reverse hex string s.

    On malformed input the raised error's `partial` holds the bytes
    decoded before the failure.
    """
    src = _as_bytes(s)
    dst = bytearray(decoded_len(len(src)))
    n = decode(dst, src)
    return bytes(dst[:n])


# ═══════════════════════════════════════════════════════════════
# STREAMING DECODER
# ═══════════════════════════════════════════════════════════════

class RevhexDecoder(io.RawIOBase):
    """
    Readable stream that decodes reverse hex pulled from a byte source.

    Usage:
        dec = RevhexDecoder(io.BytesIO(b"vrtutntntkxzvstksztrtusxxy"))
        dec.read()   # b"Hello Gopher!"

    The source only needs read(n), returning b'' at end of stream. At
    most buffer_size encoded bytes are held at once; between reads at
    most one undecoded symbol is carried over.

    Errors are sticky and only raised once buffered output is drained:
    a read that produces bytes returns them, the next read raises. A
    clean end of stream returns 0 / b'' from then on.
    """

    def __init__(self, source, buffer_size: int = BUFFER_SIZE):
        super().__init__()
        self._source = source
        self._arr = bytearray(check_buffer_size(buffer_size))
        self._view = memoryview(self._arr)
        self._start = 0     # pending input is _arr[_start:_end]
        self._end = 0
        self._eof = False
        self._fault: Optional[BaseException] = None
        self.state = StreamState.IDLE

    @property
    def fault(self) -> Optional[BaseException]:
        return self._fault

    @property
    def pending(self) -> int:
        """Encoded bytes buffered but not yet decoded."""
        return self._end - self._start

    def readable(self) -> bool:
        return True

    def readinto(self, b) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed file.")
        out = memoryview(b).cast('B')

        while self.pending < 2 and self._fault is None and not self._eof:
            self._fill()

        n = min(len(out), self.pending // 2)
        written = 0
        if n > 0:
            self.state = StreamState.DECODING
            try:
                written = decode(out[:n], self._view[self._start:self._start + 2 * n])
            except RevhexError as e:
                # Discard the rest of the buffered input
                written = e.written
                self._start = self._end = 0
                self._latch(e)
            else:
                self._start += 2 * written
        self._settle()

        if written > 0 or len(out) == 0:
            return written
        if self._fault is not None:
            raise self._fault
        return 0

    # ─── Internals ────────────────────────────────────────────

    def _fill(self):
        """Move the leftover symbol to the front and top up from the source."""
        self.state = StreamState.FILLING
        k = self.pending    # 0 or 1
        self._arr[0:k] = self._arr[self._start:self._end]
        self._start, self._end = 0, k

        try:
            data = self._source.read(len(self._arr) - k)
        except Exception as e:
            self._latch(e)
            return

        if not data:
            self._eof = True
            if k % 2 == 1:
                last = self._arr[k - 1]
                if not is_revhex_byte(last):
                    self._latch(InvalidByteError(last))
                else:
                    self._latch(UnexpectedEndOfStreamError())
            return

        self._arr[k:k + len(data)] = data
        self._end = k + len(data)

    def _latch(self, err: BaseException):
        self._fault = err
        logger.debug(f"revhex decoder faulted with {self.pending} bytes pending: {err!r}")

    def _settle(self):
        if self._fault is not None:
            self.state = StreamState.FAULTED
        elif self._eof and self.pending == 0:
            self.state = StreamState.DRAINED
        else:
            self.state = StreamState.IDLE
