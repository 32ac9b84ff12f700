"""Decoding of the manifest and metadata signature blobs that follow the header"""

import logging
from typing import BinaryIO

from google.protobuf.message import DecodeError as ProtobufDecodeError

from . import update_metadata as um
from .errors import FormatError
from .header import Header

logger = logging.getLogger(__name__)


def _remaining(f: BinaryIO) -> int:
    pos = f.tell()
    end = f.seek(0, 2)
    f.seek(pos)
    return end - pos


def _read_blob(f: BinaryIO, size: int, what: str) -> bytes:
    # header sizes are untrusted; compare them to the file before allocating
    available = _remaining(f)
    if size > available:
        raise FormatError(f"Truncated {what}: got {available} of {size} bytes")
    data = f.read(size)
    if len(data) != size:
        raise FormatError(f"Truncated {what}: got {len(data)} of {size} bytes")
    return data


def _parse(message, data: bytes, what: str):
    try:
        message.ParseFromString(data)
    except ProtobufDecodeError as e:
        raise FormatError(f"Malformed {what}: {e}") from e
    return message


def read_manifest(f: BinaryIO, header: Header) -> tuple:
    """
    Read the manifest and its signature from `f`, which must be positioned
    right after the header. Returns (DeltaArchiveManifest, Signatures).
    """
    manifest_data = _read_blob(f, header.manifest_size, 'manifest')
    signature_data = _read_blob(f, header.manifest_signature_size, 'manifest signature')

    manifest = _parse(um.DeltaArchiveManifest(), manifest_data, 'manifest')
    signatures = _parse(um.Signatures(), signature_data, 'manifest signature')

    logger.debug("Manifest: %d partitions, block size %d, minor version %d",
                 len(manifest.partitions), manifest.block_size, manifest.minor_version)
    logger.debug("Manifest signature: %d entries", len(signatures.signatures))
    return manifest, signatures


def partition_sort_key(part) -> bytes:
    return part.partition_name.encode('utf-8')


def sort_partitions(partitions) -> list:
    """PartitionUpdate entries ordered by name, compared byte-wise"""
    return sorted(partitions, key=partition_sort_key)


def describe_partition(part) -> tuple[str, int, int]:
    """(name, declared size, operation count) of a PartitionUpdate"""
    return part.partition_name, part.new_partition_info.size, len(part.operations)
