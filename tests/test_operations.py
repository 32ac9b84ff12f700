import bz2
import lzma

import pytest
import zstandard

from otadump.errors import DecodeError, UnsupportedOperation
from otadump.operations import BLOCK_SIZE, OperationType, decode, op_name

from conftest import random_bytes

PLAIN = random_bytes(3 * BLOCK_SIZE, seed=5)

COMPRESSORS = {
    OperationType.REPLACE_XZ: lzma.compress,
    OperationType.REPLACE_BZ: bz2.compress,
    OperationType.REPLACE_ZSTD: zstandard.ZstdCompressor().compress,
}


@pytest.mark.parametrize('k', [0, 1, 7])
def test_zero_ignores_input(k):
    assert decode(b'garbage that is ignored', OperationType.ZERO, k * BLOCK_SIZE) == bytes(k * BLOCK_SIZE)


def test_replace_passthrough():
    assert decode(PLAIN, OperationType.REPLACE, len(PLAIN)) == PLAIN


def test_replace_size_mismatch():
    with pytest.raises(DecodeError):
        decode(PLAIN[:-1], OperationType.REPLACE, len(PLAIN))
    with pytest.raises(DecodeError):
        decode(PLAIN, OperationType.REPLACE, BLOCK_SIZE)


@pytest.mark.parametrize('op_type', list(COMPRESSORS))
def test_compressed_round_trip(op_type):
    encoded = COMPRESSORS[op_type](PLAIN)
    assert decode(encoded, op_type, len(PLAIN)) == PLAIN


@pytest.mark.parametrize('op_type', list(COMPRESSORS))
def test_compressed_too_short(op_type):
    encoded = COMPRESSORS[op_type](PLAIN[:BLOCK_SIZE])
    with pytest.raises(DecodeError, match='too short'):
        decode(encoded, op_type, 2 * BLOCK_SIZE)


@pytest.mark.parametrize('op_type', list(COMPRESSORS))
def test_compressed_too_long(op_type):
    encoded = COMPRESSORS[op_type](PLAIN)
    with pytest.raises(DecodeError, match='exceeds'):
        decode(encoded, op_type, BLOCK_SIZE)


@pytest.mark.parametrize('op_type', list(COMPRESSORS))
def test_compressed_corrupt(op_type):
    with pytest.raises(DecodeError):
        decode(b'\x00not a compressed stream at all' * 10, op_type, BLOCK_SIZE)


@pytest.mark.parametrize('op_type', [OperationType.REPLACE_XZ, OperationType.REPLACE_BZ])
def test_compressed_truncated_stream(op_type):
    encoded = COMPRESSORS[op_type](PLAIN)
    with pytest.raises(DecodeError):
        decode(encoded[:len(encoded) // 2], op_type, len(PLAIN))


def test_codec_mismatch():
    with pytest.raises(DecodeError):
        decode(bz2.compress(PLAIN), OperationType.REPLACE_XZ, len(PLAIN))


@pytest.mark.parametrize('op_type', [OperationType.SOURCE_COPY, OperationType.SOURCE_BSDIFF,
                                     OperationType.PUFFDIFF, OperationType.DISCARD])
def test_delta_operations_unsupported(op_type):
    with pytest.raises(UnsupportedOperation) as excinfo:
        decode(b'', op_type, BLOCK_SIZE)
    assert excinfo.value.op_type == op_type
    assert op_type.name in str(excinfo.value)


def test_unknown_type_unsupported():
    with pytest.raises(UnsupportedOperation) as excinfo:
        decode(PLAIN, 99, len(PLAIN))
    assert excinfo.value.op_type == 99
    assert excinfo.value.name is None


def test_op_name():
    assert op_name(14) == 'REPLACE_ZSTD'
    assert op_name(42) == 'UNKNOWN(42)'
