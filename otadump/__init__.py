"""
Android payload.bin extractor
Extracts partition images from A/B OTA payload.bin files (Brillo/AOSP format)
"""

from .errors import (DecodeError, ExtractError, FormatError, IntegrityError, PartitionNotFound,
                     PayloadError, UnsupportedOperation)
from .header import Header, read_header
from .operations import BLOCK_SIZE, OperationType, decode
from .payload import Payload
from .pipeline import ExtractConfig
from .scheduler import run

__version__ = '1.0.0'


def open_payload(path, verify: bool = True, progress=None) -> Payload:
    """Shorthand for Payload.open() with an ExtractConfig built from keywords"""
    config = ExtractConfig(verify=verify) if progress is None else ExtractConfig(verify, progress)
    return Payload.open(path, config)
