"""Placement of decoded operation data into a partition image"""

import logging
from dataclasses import dataclass
from typing import BinaryIO

from .operations import BLOCK_SIZE, op_name

logger = logging.getLogger(__name__)


@dataclass
class PartitionExtent:
    data: bytes
    op_type: int
    start_block: int
    num_blocks: int

    @classmethod
    def from_extent(cls, data: bytes, op_type: int, extent) -> 'PartitionExtent':
        return cls(data, op_type, extent.start_block, extent.num_blocks)

    @property
    def offset(self) -> int:
        return self.start_block * BLOCK_SIZE

    @property
    def size(self) -> int:
        return self.num_blocks * BLOCK_SIZE

    def __str__(self) -> str:
        return f"{op_name(self.op_type)} blocks {self.start_block}+{self.num_blocks}"


def write_extent(f_out: BinaryIO, extent: PartitionExtent) -> int:
    """Write the extent's data at its block offset, returning the byte count"""
    logger.debug("Writing %s (%d bytes at offset %d)", extent, len(extent.data), extent.offset)
    f_out.seek(extent.offset)
    f_out.write(extent.data)
    return len(extent.data)
