"""
Revhex Codec - codecs registry integration
===========================================

Makes reverse hex available through the standard codecs machinery, the
same way the built-in `hex` codec is:

    import revhex_codec
    revhex_codec.register()
    codecs.encode(b"\\x01\\x23", "revhex")   # b"zyxw"
    codecs.decode(b"ZYXW", "revhex")        # b"\\x01\\x23"

Bytes-to-bytes codec; only errors='strict' is supported.
"""

import codecs

from revhex_types import (
    InvalidByteError, UnexpectedEndOfStreamError, is_revhex_byte,
)
from revhex_encoder import append_encode
from revhex_decoder import decode_string

CODEC_NAMES = ('revhex', 'rev_hex', 'rev-hex')


def _check_errors(errors):
    if errors != 'strict':
        raise ValueError(f"revhex codec only supports errors='strict', got {errors!r}")


def revhex_encode(input, errors='strict'):
    _check_errors(errors)
    return (bytes(append_encode(bytearray(), input)), len(input))


def revhex_decode(input, errors='strict'):
    _check_errors(errors)
    return (decode_string(input), len(input))


class Codec(codecs.Codec):
    def encode(self, input, errors='strict'):
        return revhex_encode(input, errors)

    def decode(self, input, errors='strict'):
        return revhex_decode(input, errors)


class IncrementalEncoder(codecs.IncrementalEncoder):
    def encode(self, input, final=False):
        _check_errors(self.errors)
        return bytes(append_encode(bytearray(), input))


class IncrementalDecoder(codecs.IncrementalDecoder):
    """Carries an unpaired trailing symbol over to the next call."""

    def __init__(self, errors='strict'):
        super().__init__(errors)
        self._leftover = b''

    def decode(self, input, final=False):
        _check_errors(self.errors)
        data = self._leftover + bytes(input)
        end = len(data) - len(data) % 2
        self._leftover = data[end:]
        out = decode_string(data[:end])

        if final and self._leftover:
            last = self._leftover[0]
            self._leftover = b''
            if not is_revhex_byte(last):
                raise InvalidByteError(last, len(out), out)
            raise UnexpectedEndOfStreamError(len(out), out)
        return out

    def reset(self):
        self._leftover = b''

    def getstate(self):
        return (self._leftover, 0)

    def setstate(self, state):
        self._leftover = state[0]


class StreamWriter(Codec, codecs.StreamWriter):
    charbuffertype = bytes


def getregentry() -> codecs.CodecInfo:
    return codecs.CodecInfo(
        name='revhex',
        encode=revhex_encode,
        decode=revhex_decode,
        incrementalencoder=IncrementalEncoder,
        incrementaldecoder=IncrementalDecoder,
        streamwriter=StreamWriter,
        _is_text_encoding=False,
    )


def _search(name):
    if name in CODEC_NAMES:
        return getregentry()
    return None


_registered = False


def register():
    """Register the revhex codec with the codecs module. Safe to call twice."""
    global _registered
    if not _registered:
        codecs.register(_search)
        _registered = True
