"""Name-sorted lookup over the partitions of a manifest"""

from bisect import bisect_left
from typing import Iterator

from .errors import FormatError, PartitionNotFound
from .manifest import partition_sort_key, sort_partitions


def check_partition_name(name: str):
    """Names become <output_dir>/<name>.img, so they must stay a single path component"""
    if not name or '..' in name or '\x00' in name or any(sep in name for sep in ('/', '\\')):
        raise FormatError(f"Invalid partition name in manifest: {name!r}")


class PartitionIndex:
    """
    Read-only view over PartitionUpdate entries sorted by name.

    Built once before extraction starts and shared between workers without
    locking, so nothing here mutates after __init__.
    """

    def __init__(self, partitions):
        self._partitions = tuple(sort_partitions(partitions))
        self._keys = tuple(partition_sort_key(p) for p in self._partitions)

        for part in self._partitions:
            check_partition_name(part.partition_name)
        for prev, cur in zip(self._keys, self._keys[1:]):
            if prev == cur:
                raise FormatError(f"Duplicate partition in manifest: {cur.decode('utf-8')}")

    def lookup(self, name: str):
        key = name.encode('utf-8')
        i = bisect_left(self._keys, key)
        if i < len(self._keys) and self._keys[i] == key:
            return self._partitions[i]
        raise PartitionNotFound(name)

    def names(self) -> list[str]:
        return [p.partition_name for p in self._partitions]

    def __contains__(self, name: str) -> bool:
        try:
            self.lookup(name)
        except PartitionNotFound:
            return False
        return True

    def __iter__(self) -> Iterator:
        return iter(self._partitions)

    def __len__(self) -> int:
        return len(self._partitions)
