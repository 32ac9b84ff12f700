"""
Message classes for the update_engine payload metadata (update_metadata.proto)

The schema is declared here with descriptor_pb2 so no protoc step is needed.
Only the fields this tool reads are declared; anything else in a real manifest
is kept as unknown fields by the protobuf runtime.
"""

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

PACKAGE = 'chromeos_update_engine'

_F = descriptor_pb2.FieldDescriptorProto

UINT32 = _F.TYPE_UINT32
UINT64 = _F.TYPE_UINT64
INT64 = _F.TYPE_INT64
FIXED32 = _F.TYPE_FIXED32
BOOL = _F.TYPE_BOOL
STRING = _F.TYPE_STRING
BYTES = _F.TYPE_BYTES
MESSAGE = _F.TYPE_MESSAGE


def _add_field(msg, name: str, number: int, ftype: int, type_name: str = None,
               repeated: bool = False, default: str = None):
    field = msg.field.add(name=name, number=number, type=ftype)
    field.label = _F.LABEL_REPEATED if repeated else _F.LABEL_OPTIONAL
    if type_name:
        field.type_name = f'.{PACKAGE}.{type_name}'
    if default is not None:
        field.default_value = default


def _build_file() -> descriptor_pb2.FileDescriptorProto:
    fd = descriptor_pb2.FileDescriptorProto(
        name='otadump/update_metadata.proto', package=PACKAGE, syntax='proto2')

    extent = fd.message_type.add(name='Extent')
    _add_field(extent, 'start_block', 1, UINT64)
    _add_field(extent, 'num_blocks', 2, UINT64)

    sigs = fd.message_type.add(name='Signatures')
    sig = sigs.nested_type.add(name='Signature')
    _add_field(sig, 'version', 1, UINT32)
    _add_field(sig, 'data', 2, BYTES)
    _add_field(sig, 'unpadded_signature_size', 3, FIXED32)
    _add_field(sigs, 'signatures', 1, MESSAGE, 'Signatures.Signature', repeated=True)

    info = fd.message_type.add(name='PartitionInfo')
    _add_field(info, 'size', 1, UINT64)
    _add_field(info, 'hash', 2, BYTES)

    # `type` is an enum upstream; declared as uint32 so values this tool does
    # not know are kept as-is instead of falling back to REPLACE.
    op = fd.message_type.add(name='InstallOperation')
    _add_field(op, 'type', 1, UINT32)
    _add_field(op, 'data_offset', 2, UINT64)
    _add_field(op, 'data_length', 3, UINT64)
    _add_field(op, 'src_extents', 4, MESSAGE, 'Extent', repeated=True)
    _add_field(op, 'src_length', 5, UINT64)
    _add_field(op, 'dst_extents', 6, MESSAGE, 'Extent', repeated=True)
    _add_field(op, 'dst_length', 7, UINT64)
    _add_field(op, 'data_sha256_hash', 8, BYTES)
    _add_field(op, 'src_sha256_hash', 9, BYTES)

    part = fd.message_type.add(name='PartitionUpdate')
    _add_field(part, 'partition_name', 1, STRING)
    _add_field(part, 'run_postinstall', 2, BOOL)
    _add_field(part, 'postinstall_path', 3, STRING)
    _add_field(part, 'filesystem_type', 4, STRING)
    _add_field(part, 'new_partition_signature', 5, MESSAGE, 'Signatures.Signature', repeated=True)
    _add_field(part, 'old_partition_info', 6, MESSAGE, 'PartitionInfo')
    _add_field(part, 'new_partition_info', 7, MESSAGE, 'PartitionInfo')
    _add_field(part, 'operations', 8, MESSAGE, 'InstallOperation', repeated=True)
    _add_field(part, 'version', 17, STRING)

    dam = fd.message_type.add(name='DeltaArchiveManifest')
    _add_field(dam, 'block_size', 3, UINT32, default='4096')
    _add_field(dam, 'signatures_offset', 4, UINT64)
    _add_field(dam, 'signatures_size', 5, UINT64)
    _add_field(dam, 'minor_version', 12, UINT32, default='0')
    _add_field(dam, 'partitions', 13, MESSAGE, 'PartitionUpdate', repeated=True)
    _add_field(dam, 'max_timestamp', 14, INT64)
    _add_field(dam, 'partial_update', 16, BOOL)
    _add_field(dam, 'security_patch_level', 18, STRING)

    return fd


_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(_build_file().SerializeToString())


def _message(name: str):
    return message_factory.GetMessageClass(_pool.FindMessageTypeByName(f'{PACKAGE}.{name}'))


Extent = _message('Extent')
Signatures = _message('Signatures')
PartitionInfo = _message('PartitionInfo')
InstallOperation = _message('InstallOperation')
PartitionUpdate = _message('PartitionUpdate')
DeltaArchiveManifest = _message('DeltaArchiveManifest')
