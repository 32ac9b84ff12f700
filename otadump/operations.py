"""Decoding of a single install operation's data"""

import bz2
import io
import lzma
from enum import IntEnum
from typing import BinaryIO, Callable

import zstandard

from .errors import DecodeError, UnsupportedOperation

BLOCK_SIZE = 4096


class OperationType(IntEnum):
    """InstallOperation.Type wire values"""
    REPLACE = 0
    REPLACE_BZ = 1
    MOVE = 2
    BSDIFF = 3
    SOURCE_COPY = 4
    SOURCE_BSDIFF = 5
    ZERO = 6
    DISCARD = 7
    REPLACE_XZ = 8
    PUFFDIFF = 9
    BROTLI_BSDIFF = 10
    ZUCCHINI = 11
    LZ4DIFF_BSDIFF = 12
    LZ4DIFF_PUFFDIFF = 13
    REPLACE_ZSTD = 14


def op_name(op_type: int) -> str:
    try:
        return OperationType(op_type).name
    except ValueError:
        return f'UNKNOWN({op_type})'


def _decode_zero(data: bytes, expected_len: int) -> bytes:
    return bytes(expected_len)


def _decode_replace(data: bytes, expected_len: int) -> bytes:
    if len(data) != expected_len:
        raise DecodeError(f"REPLACE data is {len(data)} bytes, expected {expected_len}")
    return data


def _read_exact(reader: BinaryIO, expected_len: int) -> bytes:
    """Read `expected_len` bytes from a decompressing reader, rejecting short or long output"""
    out = bytearray()
    # one byte past the limit is enough to tell that the stream is too long
    while len(out) <= expected_len:
        chunk = reader.read(expected_len + 1 - len(out))
        if not chunk:
            break
        out += chunk

    if len(out) < expected_len:
        raise DecodeError(f"Decompressed data too short: {len(out)} of {expected_len} bytes")
    if len(out) > expected_len:
        raise DecodeError(f"Decompressed data exceeds {expected_len} bytes")
    return bytes(out)


def _decompressor(open_reader: Callable[[BinaryIO], BinaryIO], errors: tuple, codec: str):
    def decode(data: bytes, expected_len: int) -> bytes:
        try:
            with open_reader(io.BytesIO(data)) as reader:
                return _read_exact(reader, expected_len)
        except errors as e:
            raise DecodeError(f"{codec} decompression failed: {e}") from e
    return decode


_decode_xz = _decompressor(
    lambda f: lzma.LZMAFile(f), (lzma.LZMAError, EOFError, OSError), 'xz')
_decode_bz = _decompressor(
    lambda f: bz2.BZ2File(f), (EOFError, OSError), 'bzip2')
_decode_zstd = _decompressor(
    lambda f: zstandard.ZstdDecompressor().stream_reader(f),
    (zstandard.ZstdError, EOFError, OSError), 'zstd')

_DECODERS = {
    OperationType.ZERO: _decode_zero,
    OperationType.REPLACE: _decode_replace,
    OperationType.REPLACE_XZ: _decode_xz,
    OperationType.REPLACE_BZ: _decode_bz,
    OperationType.REPLACE_ZSTD: _decode_zstd,
}


def decode(data: bytes, op_type: int, expected_len: int) -> bytes:
    """
    Decode the encoded bytes of one operation into exactly `expected_len` bytes.

    Raises UnsupportedOperation for any type without a decoder (delta
    operations and values unknown to OperationType) and DecodeError when the
    codec fails or the output size is wrong.
    """
    try:
        decoder = _DECODERS.get(OperationType(op_type))
    except ValueError:
        raise UnsupportedOperation(op_type) from None
    if decoder is None:
        raise UnsupportedOperation(op_type, OperationType(op_type).name)
    return decoder(data, expected_len)
