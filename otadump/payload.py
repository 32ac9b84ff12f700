"""
In-memory view of a payload.bin: header, manifest, signature and partition index
"""

import logging
from pathlib import Path
from typing import Iterator, Optional

from .errors import PartitionNotFound
from .header import HEADER_SIZE, Header, read_header
from .index import PartitionIndex
from .manifest import read_manifest
from .pipeline import ExtractConfig, PartitionExtractor

logger = logging.getLogger(__name__)


class Payload:
    """
    A parsed payload. Build one with Payload.open(); everything on it is
    read-only afterwards, so extract() may be called from several threads for
    different partitions.
    """

    def __init__(self, path: Path, header: Header, manifest, signatures,
                 config: ExtractConfig = None):
        self.path = Path(path)
        self.header = header
        self.manifest = manifest
        self.signatures = signatures
        self.config = config or ExtractConfig()
        self.index = PartitionIndex(manifest.partitions)
        self._extractor = PartitionExtractor(self.path, self.data_offset, self.config)

    @classmethod
    def open(cls, path, config: ExtractConfig = None) -> 'Payload':
        """Parse header, manifest and signature of the payload at `path`"""
        with open(path, 'rb') as f:
            header = read_header(f)
            manifest, signatures = read_manifest(f, header)
        logger.debug("Opened %s: %s", path, header)
        return cls(path, header, manifest, signatures, config)

    @property
    def metadata_size(self) -> int:
        return HEADER_SIZE + self.header.manifest_size

    @property
    def data_offset(self) -> int:
        return self.header.data_offset

    @property
    def block_size(self) -> int:
        return self.manifest.block_size

    def partition_names(self) -> list[str]:
        return self.index.names()

    def partitions(self) -> Iterator:
        return iter(self.index)

    def lookup(self, name: str):
        return self.index.lookup(name)

    def extract(self, name: str, output_dir) -> Optional[Path]:
        """
        Reconstruct partition `name` as <output_dir>/<name>.img.

        Returns the image path, or None when the payload has no such partition
        (nothing is written in that case). Failures raise ExtractError.
        """
        try:
            partition = self.lookup(name)
        except PartitionNotFound as e:
            logger.warning("%s", e)
            return None
        return self._extractor.extract(partition, Path(output_dir))
