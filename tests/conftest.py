import hashlib
import struct

import pytest

from otadump import update_metadata as um
from otadump.header import PAYLOAD_MAGIC
from otadump.operations import BLOCK_SIZE, OperationType


def make_op(op_type: int, data: bytes, start_block: int, num_blocks: int, sha256: bytes = None):
    """Description of one operation for build_payload"""
    return {
        'type': int(op_type),
        'data': data,
        'extents': [(start_block, num_blocks)],
        'sha256': sha256,
    }


def build_payload(path, partitions, version: int = 2, magic: bytes = PAYLOAD_MAGIC,
                  signature_data: bytes = b'sig') -> dict:
    """
    Write a payload.bin to `path`. `partitions` maps name -> list of make_op()
    dicts. Returns a dict with the manifest and the data blob offset.
    """
    manifest = um.DeltaArchiveManifest()
    manifest.minor_version = 0
    blob = bytearray()

    for name, ops in partitions.items():
        part = manifest.partitions.add(partition_name=name)
        size = 0
        for op in ops:
            iop = part.operations.add(type=op['type'])
            data = op['data']
            if op['type'] == OperationType.ZERO:
                if op['sha256'] is not None:
                    iop.data_sha256_hash = op['sha256']
            else:
                iop.data_offset = op.get('data_offset', len(blob))
                iop.data_length = op.get('data_length', len(data))
                sha = op['sha256']
                iop.data_sha256_hash = sha if sha is not None else hashlib.sha256(data).digest()
                blob += data
            for start, num in op['extents']:
                iop.dst_extents.add(start_block=start, num_blocks=num)
                size = max(size, (start + num) * BLOCK_SIZE)
        part.new_partition_info.size = size

    signatures = um.Signatures()
    signatures.signatures.add(version=1, data=signature_data)

    manifest_bytes = manifest.SerializeToString()
    signature_bytes = signatures.SerializeToString()
    header = struct.pack('>4sQQI', magic, version, len(manifest_bytes), len(signature_bytes))

    with open(path, 'wb') as f:
        f.write(header)
        f.write(manifest_bytes)
        f.write(signature_bytes)
        f.write(blob)

    return {
        'manifest': manifest,
        'data_offset': len(header) + len(manifest_bytes) + len(signature_bytes),
    }


def random_bytes(size: int, seed: int = 0) -> bytes:
    return bytes((i * 31 + seed * 7 + (i >> 8)) & 0xff for i in range(size))


@pytest.fixture
def boot_payload(tmp_path):
    """Payload with a single `boot` partition made of one 2-block REPLACE operation"""
    path = tmp_path / 'payload.bin'
    data = random_bytes(2 * BLOCK_SIZE)
    info = build_payload(path, {'boot': [make_op(OperationType.REPLACE, data, 0, 2)]})
    info.update(path=path, data=data)
    return info


@pytest.fixture
def out_dir(tmp_path):
    d = tmp_path / 'out'
    d.mkdir()
    return d
