"""
Revhex Encoder - Reverse Hexadecimal Encoding
==============================================

Encodes bytes into reverse hex text: every source byte becomes two
symbols, high nibble first, drawn from `zyxwvutsrqponmlk`.

  - encode()            : into a caller-supplied buffer
  - append_encode()     : onto a growable bytearray
  - encode_to_string()  : into a new str
  - RevhexEncoder       : writable stream wrapping a byte sink

Encoding cannot fail on content; any byte value is encodable.
"""

import io
import logging
from typing import Optional

from revhex_types import (
    REVHEX_BYTES, BUFFER_SIZE,
    ShortWriteError,
    encoded_len, check_buffer_size,
)

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════
# ONE-SHOT ENCODING
# ═══════════════════════════════════════════════════════════════

def encode(dst, src) -> int:
    """
    Encode src into the first encoded_len(len(src)) bytes of dst.

    Args:
        dst: Writable buffer (bytearray, memoryview, ...), at least
             encoded_len(len(src)) long.
        src: Bytes-like input.

    Returns:
        Number of bytes written, always encoded_len(len(src)).
    """
    j = 0
    for v in memoryview(src).cast('B'):
        dst[j] = REVHEX_BYTES[v >> 4]
        dst[j + 1] = REVHEX_BYTES[v & 0x0F]
        j += 2
    return j


def append_encode(dst: bytearray, src) -> bytearray:
    """Append the reverse hex encoding of src to dst and return dst."""
    src = memoryview(src).cast('B')
    out = bytearray(encoded_len(len(src)))
    encode(out, src)
    dst.extend(out)
    return dst


def encode_to_string(src) -> str:
    """Return the reverse hex encoding of src as a str."""
    src = memoryview(src).cast('B')
    dst = bytearray(encoded_len(len(src)))
    encode(dst, src)
    return dst.decode('ascii')


# ═══════════════════════════════════════════════════════════════
# STREAMING ENCODER
# ═══════════════════════════════════════════════════════════════

class RevhexEncoder(io.RawIOBase):
    """
    Writable stream that encodes everything written to it and forwards
    lowercase reverse hex to a byte sink.

    Usage:
        out = io.BytesIO()
        enc = RevhexEncoder(out)
        enc.write(b"Hello Gopher!")
        out.getvalue()   # b"vrtutntntkxzvstksztrtusxxy"

    write() returns source-byte progress; the sink receives twice that.
    The first sink failure is sticky: it is re-raised unchanged by every
    later write() without touching the sink again.
    """

    def __init__(self, sink, buffer_size: int = BUFFER_SIZE):
        super().__init__()
        self._sink = sink
        self._out = bytearray(check_buffer_size(buffer_size))
        self._fault: Optional[BaseException] = None
        self.consumed = 0   # source bytes flushed to the sink so far

    @property
    def fault(self) -> Optional[BaseException]:
        return self._fault

    def writable(self) -> bool:
        return True

    def write(self, b) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed file.")
        if self._fault is not None:
            raise self._fault

        src = memoryview(b).cast('B')
        chunk_size = len(self._out) // 2
        n = 0
        while len(src) > 0:
            chunk = src[:chunk_size]
            encoded = encode(self._out, chunk)
            try:
                written = self._sink.write(bytes(self._out[:encoded]))
            except Exception as e:
                self._latch(e)
                raise

            # Duck-typed sinks may return None; treated as fully written
            if written is not None and written < encoded:
                accepted = max(written, 0) // 2
                n += accepted
                self.consumed += accepted
                self._latch(ShortWriteError(encoded, written))
                raise self._fault

            n += len(chunk)
            self.consumed += len(chunk)
            src = src[len(chunk):]
        return n

    def _latch(self, err: BaseException):
        self._fault = err
        logger.debug(f"revhex encoder faulted after {self.consumed} source bytes: {err!r}")
