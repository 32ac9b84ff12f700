"""
Per-partition extraction: read each operation's data from the payload, verify
it, decode it and write it into <output_dir>/<name>.img
"""

import hashlib
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO

from .errors import DecodeError, ExtractError, IntegrityError, PayloadError
from .extent import PartitionExtent, write_extent
from .operations import BLOCK_SIZE, OperationType, decode, op_name
from .progress import ProgressSink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractConfig:
    verify: bool = True
    progress: ProgressSink = field(default_factory=ProgressSink)


def image_path(output_dir: Path, name: str) -> Path:
    return Path(output_dir) / f"{name}.img"


def read_exact(f: BinaryIO, offset: int, length: int) -> bytes:
    size = os.fstat(f.fileno()).st_size
    if offset + length > size:
        available = max(size - offset, 0)
        raise OSError(f"Short read at offset {offset}: got {available} of {length} bytes")
    f.seek(offset)
    data = f.read(length)
    if len(data) != length:
        raise OSError(f"Short read at offset {offset}: got {len(data)} of {length} bytes")
    return data


def verify_data(data: bytes, expected: bytes):
    actual = hashlib.sha256(data).hexdigest()
    if actual != expected.hex():
        raise IntegrityError(expected.hex(), actual)


class PartitionExtractor:
    """
    Replays the operations of one PartitionUpdate against the payload file.

    Each call to extract() opens its own read handle on the payload, so one
    extractor can serve several worker threads at once.
    """

    def __init__(self, payload_path: Path, data_offset: int, config: ExtractConfig = None):
        self.payload_path = Path(payload_path)
        self.data_offset = data_offset
        self.config = config or ExtractConfig()

    def extract(self, partition, output_dir: Path) -> Path:
        name = partition.partition_name
        out = image_path(output_dir, name)
        progress = self.config.progress
        progress.begin(name, partition.new_partition_info.size)

        try:
            with open(self.payload_path, 'rb') as f_in, open(out, 'wb') as f_out:
                for i, op in enumerate(partition.operations):
                    extent = self._decode_operation(f_in, op, i)
                    progress.update(name, write_extent(f_out, extent))
        except (PayloadError, OSError) as e:
            raise ExtractError(name, e) from e
        finally:
            progress.end(name)

        logger.debug("Extracted %s: %d operations -> %s", name, len(partition.operations), out)
        return out

    def _decode_operation(self, f_in: BinaryIO, op, index: int) -> PartitionExtent:
        if not op.dst_extents:
            raise DecodeError(f"Operation {index} ({op_name(op.type)}) has no destination extent")
        if len(op.dst_extents) > 1:
            logger.debug("Operation %d has %d destination extents, only the first is written",
                         index, len(op.dst_extents))
        dst = op.dst_extents[0]

        data = read_exact(f_in, self.data_offset + op.data_offset, op.data_length)
        if self.config.verify and op.type != OperationType.ZERO:
            verify_data(data, op.data_sha256_hash)

        decoded = decode(data, op.type, dst.num_blocks * BLOCK_SIZE)
        return PartitionExtent.from_extent(decoded, op.type, dst)
