from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import NamedTuple, Optional, Union

from kfetches.record.attrs import RecordAttrs

__all__ = [
    "BytesLike",
    "RecordHeader",
    "Record",
    "FetchError",
]

BytesLike = Union[bytes, bytearray, memoryview]


class RecordHeader(NamedTuple):
    """An application header passed along with a record"""

    key: str
    "The header name"

    value: Optional[BytesLike]
    "The opaque header payload"


@dataclass(frozen=True)
class Record:
    """A record produced to, or fetched from, a topic partition.

    ``partition``, ``offset``, ``producer_id``, ``producer_epoch`` and
    ``leader_epoch`` stay zero until the record has been produced or fetched.
    """

    value: Optional[BytesLike] = None
    "The record payload"

    key: Optional[BytesLike] = None
    "The key (or `None` if no key is specified)"

    headers: Sequence[RecordHeader] = ()
    "Headers, in the order they were written"

    timestamp: int = 0
    "The timestamp of this record in milliseconds"

    topic: str = ""
    "The topic this record is written to or received from"

    partition: int = 0
    "The partition this record is written to or received from"

    attrs: RecordAttrs = field(default_factory=RecordAttrs)
    "Compression, timestamp type and transaction flags"

    producer_id: int = 0
    """The producer id this record was produced with.

    A producer id and epoch of ``0`` mean the record was not produced with
    a producer id, see :attr:`has_producer_id`.
    """

    producer_epoch: int = 0
    "The producer epoch this record was produced with"

    leader_epoch: int = 0
    "The partition leader epoch at write time, -1 for message sets"

    offset: int = 0
    "The position of this record in the corresponding partition"

    @property
    def has_producer_id(self) -> bool:
        return not (self.producer_id == 0 and self.producer_epoch == 0)

    @property
    def timestamp_type(self) -> int:
        return self.attrs.timestamp_type

    @property
    def serialized_key_size(self) -> int:
        return len(self.key) if self.key is not None else -1

    @property
    def serialized_value_size(self) -> int:
        return len(self.value) if self.value is not None else -1


class FetchError(NamedTuple):
    """An error on one partition of a fetch"""

    topic: str
    "The topic name"

    partition: int
    "The partition id"

    error: BaseException
    "The error the partition was fetched with"
