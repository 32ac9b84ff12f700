"""Exceptions raised while reading or extracting an OTA payload"""

from typing import Optional


class PayloadError(Exception):
    """Base class for every error raised by otadump"""


class FormatError(PayloadError, ValueError):
    """Malformed container: bad magic, version, truncated or undecodable metadata"""


class PartitionNotFound(PayloadError, LookupError):
    def __init__(self, name: str):
        super().__init__(f"Partition '{name}' not found in payload")
        self.name = name


class IntegrityError(PayloadError):
    """SHA-256 of an operation's encoded data does not match the manifest"""

    def __init__(self, expected: str, actual: str):
        super().__init__(f"SHA256 hash mismatch. Expected: {expected}, Got: {actual}")
        self.expected = expected
        self.actual = actual


class DecodeError(PayloadError):
    """Operation data could not be decoded to its declared size"""


class UnsupportedOperation(DecodeError):
    def __init__(self, op_type: int, name: Optional[str] = None):
        label = f"{name} ({op_type})" if name else f"unknown type {op_type}"
        super().__init__(f"Unsupported operation: {label}")
        self.op_type = op_type
        self.name = name


class ExtractError(PayloadError):
    """A partition failed to extract; `cause` holds the underlying error"""

    def __init__(self, partition: str, cause: BaseException):
        super().__init__(f"Failed to extract '{partition}': {cause}")
        self.partition = partition
        self.cause = cause
