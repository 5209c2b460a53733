__version__ = "0.1.0"

from .errors import ClientClosedError, DataLossError
from .fetches import (
    Fetch,
    Fetches,
    FetchesRecordIter,
    FetchPartition,
    FetchTopic,
    FetchTopicPartition,
)
from .record.attrs import RecordAttrs
from .record.builders import (
    key_slice_record,
    key_string_record,
    slice_record,
    string_record,
    unsafe_borrow_record,
)
from .structs import FetchError, Record, RecordHeader

__all__ = [
    # Fetch results
    "Fetches",
    "Fetch",
    "FetchTopic",
    "FetchPartition",
    "FetchTopicPartition",
    "FetchesRecordIter",
    "FetchError",
    # Records
    "Record",
    "RecordHeader",
    "RecordAttrs",
    # Builders
    "slice_record",
    "key_slice_record",
    "string_record",
    "key_string_record",
    "unsafe_borrow_record",
    # Errors
    "ClientClosedError",
    "DataLossError",
]
