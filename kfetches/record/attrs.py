# Per-record attributes, mirroring the record batch attribute field:
#
# * No timestamp (7), set only for pre-0.10 message sets
# * Unused (6)
# * Control (5)
# * Transactional (4)
# * Timestamp Type (3)
# * Compression Type (0-2)

from typing import NamedTuple, cast

from typing_extensions import Self

from ._types import CompressionTypeT, TimestampTypeT


class RecordAttrs(NamedTuple):
    """Compression, timestamp and transaction flags of a record"""

    attrs: int = 0
    "The packed attribute byte"

    CODEC_MASK = 0x07
    TIMESTAMP_TYPE_MASK = 0x08
    TRANSACTIONAL_MASK = 0x10
    CONTROL_MASK = 0x20
    NO_TIMESTAMP_MASK = 0x80

    CREATE_TIME = 0
    LOG_APPEND_TIME = 1
    NO_TIMESTAMP_TYPE = -1

    @classmethod
    def from_batch_attributes(cls, batch_attributes: int) -> Self:
        # Only bits 0-5 of the Int16 batch attributes are record flags
        return cls(batch_attributes & 0x3F)

    @classmethod
    def no_timestamp(cls, compression_type: int = 0) -> Self:
        """Attributes of a record read from a message set without timestamps"""
        return cls(cls.NO_TIMESTAMP_MASK | (compression_type & cls.CODEC_MASK))

    @property
    def compression_type(self) -> CompressionTypeT:
        """0 is no compression, 1 is gzip, 2 is snappy, 3 is lz4, 4 is zstd"""
        return cast(CompressionTypeT, self.attrs & self.CODEC_MASK)

    @property
    def timestamp_type(self) -> TimestampTypeT:
        """How the record timestamp was determined.

        ``0`` (``CreateTime``) means the producing client set it, ``1``
        (``LogAppendTime``) means the broker did. Records from message sets
        that predate timestamps return ``-1``.
        """
        if self.attrs & self.NO_TIMESTAMP_MASK:
            return self.NO_TIMESTAMP_TYPE
        return cast(TimestampTypeT, int(bool(self.attrs & self.TIMESTAMP_TYPE_MASK)))

    @property
    def is_transactional(self) -> bool:
        return bool(self.attrs & self.TRANSACTIONAL_MASK)

    @property
    def is_control(self) -> bool:
        """Whether this is a control record (a transaction ABORT or COMMIT)"""
        return bool(self.attrs & self.CONTROL_MASK)

    def __repr__(self) -> str:
        return f"RecordAttrs(attrs={self.attrs:#04x})"
