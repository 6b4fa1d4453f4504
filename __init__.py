"""
revhex - Reverse Hexadecimal Encoding
=======================================

Base-16 encoding with `z-k` as the alphabet instead of `0-9a-f`.
One-shot encode/decode functions, streaming encoder/decoder adapters,
and a `revhex` codec for the codecs registry.
"""

from revhex_types import (
    REVHEX_TABLE, BUFFER_SIZE, StreamState,
    RevhexError, InvalidByteError, OddLengthError,
    UnexpectedEndOfStreamError, ShortWriteError,
    encoded_len, decoded_len,
)
from revhex_encoder import encode, append_encode, encode_to_string, RevhexEncoder
from revhex_decoder import decode, append_decode, decode_string, RevhexDecoder
from revhex_codec import register

__version__ = "1.0.0"
__all__ = [
    'encode', 'append_encode', 'encode_to_string', 'RevhexEncoder',
    'decode', 'append_decode', 'decode_string', 'RevhexDecoder',
    'encoded_len', 'decoded_len', 'register',
    'REVHEX_TABLE', 'BUFFER_SIZE', 'StreamState',
    'RevhexError', 'InvalidByteError', 'OddLengthError',
    'UnexpectedEndOfStreamError', 'ShortWriteError',
]
