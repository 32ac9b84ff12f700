import io
import struct

import pytest

from otadump.errors import FormatError
from otadump.header import HEADER_SIZE, read_header


def header_bytes(magic=b'CrAU', version=2, manifest_size=100, signature_size=20):
    return struct.pack('>4sQQI', magic, version, manifest_size, signature_size)


def test_read_header():
    f = io.BytesIO(header_bytes() + b'rest')
    header = read_header(f)

    assert header.magic == b'CrAU'
    assert header.major_version == 2
    assert header.manifest_size == 100
    assert header.manifest_signature_size == 20
    assert f.tell() == HEADER_SIZE == 24


def test_data_offset():
    header = read_header(io.BytesIO(header_bytes(manifest_size=1000, signature_size=267)))
    assert header.data_offset == 24 + 1000 + 267


def test_big_endian_fields():
    raw = b'CrAU' + (2).to_bytes(8, 'big') + (0x0102).to_bytes(8, 'big') + (0x03).to_bytes(4, 'big')
    header = read_header(io.BytesIO(raw))
    assert header.manifest_size == 0x0102
    assert header.manifest_signature_size == 3


def test_bad_magic():
    with pytest.raises(FormatError, match='magic'):
        read_header(io.BytesIO(header_bytes(magic=b'PK\x03\x04')))


@pytest.mark.parametrize('version', [0, 1, 3])
def test_unsupported_version(version):
    with pytest.raises(FormatError, match='version'):
        read_header(io.BytesIO(header_bytes(version=version)))


def test_truncated_header():
    with pytest.raises(FormatError, match='Truncated'):
        read_header(io.BytesIO(header_bytes()[:20]))


def test_header_is_immutable():
    header = read_header(io.BytesIO(header_bytes()))
    with pytest.raises(AttributeError):
        header.manifest_size = 0


def test_str():
    header = read_header(io.BytesIO(header_bytes()))
    assert str(header) == 'magic=CrAU version=2 manifest=100 bytes signature=20 bytes'
