"""Fixed-size header at the start of payload.bin"""

import struct
from dataclasses import dataclass
from typing import BinaryIO

from .errors import FormatError

PAYLOAD_MAGIC = b'CrAU'
SUPPORTED_MAJOR_VERSION = 2

# magic, major version, manifest size, manifest signature size
HEADER_FORMAT = '>4sQQI'
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)


@dataclass(frozen=True)
class Header:
    magic: bytes
    major_version: int
    manifest_size: int
    manifest_signature_size: int

    @property
    def data_offset(self) -> int:
        """Absolute offset of the data blob region"""
        return HEADER_SIZE + self.manifest_size + self.manifest_signature_size

    def __str__(self) -> str:
        return (f"magic={self.magic.decode('ascii', 'replace')} "
                f"version={self.major_version} "
                f"manifest={self.manifest_size} bytes "
                f"signature={self.manifest_signature_size} bytes")


def read_header(f: BinaryIO) -> Header:
    """Read and validate the header, leaving `f` positioned at the manifest"""
    raw = f.read(HEADER_SIZE)
    if len(raw) != HEADER_SIZE:
        raise FormatError(f"Truncated header: got {len(raw)} of {HEADER_SIZE} bytes")

    magic, version, manifest_size, signature_size = struct.unpack(HEADER_FORMAT, raw)
    if magic != PAYLOAD_MAGIC:
        raise FormatError(f"Invalid magic: {magic!r}")
    if version != SUPPORTED_MAJOR_VERSION:
        raise FormatError(f"Unsupported version: {version}")

    return Header(magic, version, manifest_size, signature_size)
