# Helpers to build records for producing.
#
# Raw byte buffers are stored as given, without a copy. ``bytes`` is
# immutable so this is always safe; a ``bytearray`` or writable
# ``memoryview`` is taken over by the record and must not be changed by the
# caller afterwards. Nothing in this package ever writes to a record's key
# or value.

import logging
from typing import Optional

from kfetches.structs import BytesLike, Record

__all__ = [
    "slice_record",
    "key_slice_record",
    "string_record",
    "key_string_record",
    "unsafe_borrow_record",
]

log = logging.getLogger(__name__)


def slice_record(value: BytesLike) -> Record:
    """Return a record with the value set to the ``value`` buffer"""
    return Record(value=value)


def key_slice_record(key: Optional[BytesLike], value: BytesLike) -> Record:
    """Return a record with the key and value set to the given buffers"""
    return Record(key=key, value=value)


def string_record(value: str, *, encoding: str = "utf-8") -> Record:
    """Return a record with the value set to the encoded ``value`` string.

    The string is encoded exactly once, into an immutable ``bytes``.
    """
    return Record(value=value.encode(encoding))


def key_string_record(
    key: Optional[str], value: str, *, encoding: str = "utf-8"
) -> Record:
    """Return a record with the key and value set to the encoded strings"""
    return Record(
        key=key.encode(encoding) if key is not None else None,
        value=value.encode(encoding),
    )


def _borrow(buffer: BytesLike) -> memoryview:
    view = memoryview(buffer)
    if not view.readonly:
        log.debug("Borrowing a writable buffer of %d bytes", view.nbytes)
        view = view.toreadonly()
    return view


def unsafe_borrow_record(
    value: BytesLike, key: Optional[BytesLike] = None
) -> Record:
    """Return a record whose key and value alias the given buffers.

    The record holds read-only ``memoryview`` objects over the caller's
    storage, so nothing is copied, even for a ``bytearray``. The caller must
    keep the buffers alive and unchanged for as long as the record is used;
    changing them changes the record. A buffer with exports can't be resized.
    """
    return Record(
        key=_borrow(key) if key is not None else None,
        value=_borrow(value),
    )
