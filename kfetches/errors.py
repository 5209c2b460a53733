import inspect
import sys
from typing import Iterable, Type

from kafka.errors import CorruptRecordException  # 2
from kafka.errors import NoError  # 0
from kafka.errors import NotLeaderForPartitionError  # 6
from kafka.errors import OffsetOutOfRangeError  # 1
from kafka.errors import TopicAuthorizationFailedError  # 29
from kafka.errors import UnknownError  # -1
from kafka.errors import UnknownTopicOrPartitionError  # 3
from kafka.errors import (
    BrokerResponseError,
    IllegalStateError,
    KafkaError,
    UnsupportedCodecError,
)


__all__ = [
    # kfetches custom errors
    "ClientClosedError",
    "DataLossError",
    # Kafka Python errors
    "KafkaError",
    "IllegalStateError",
    "BrokerResponseError",
    "UnsupportedCodecError",
    # Numbered errors
    "NoError",  # 0
    "UnknownError",  # -1
    "OffsetOutOfRangeError",  # 1
    "CorruptRecordException",  # 2
    "UnknownTopicOrPartitionError",  # 3
    "NotLeaderForPartitionError",  # 6
    "TopicAuthorizationFailedError",  # 29
    "KafkaStorageError",  # 56
    "FencedLeaderEpochError",  # 74
    "UnknownLeaderEpochError",  # 75
    "for_code",
]


class ClientClosedError(KafkaError):
    """Injected into a fetch when the client is closed while polling."""

    def __init__(self, msg: str = "client closed") -> None:
        super().__init__(msg)


class DataLossError(KafkaError):
    """Records were lost between what was consumed and what the broker has.

    This is informational: the layer driving fetches has already reset the
    partition to ``reset_to`` and keeps consuming. It is worth logging, not
    worth a restart.
    """

    def __init__(
        self, topic: str, partition: int, consumed_to: int, reset_to: int
    ) -> None:
        self.topic = topic
        self.partition = partition
        self.consumed_to = consumed_to
        self.reset_to = reset_to
        if consumed_to > reset_to:
            reason = "partition was truncated"
        else:
            reason = "records were deleted or compacted"
        super().__init__(
            f"topic {topic} partition {partition} lost records; the client"
            f" consumed to offset {consumed_to} but was reset to offset"
            f" {reset_to} ({reason})"
        )


class KafkaStorageError(BrokerResponseError):
    errno = 56
    message = "KAFKA_STORAGE_ERROR"
    description = "Disk error when trying to access log file on the disk."


class FencedLeaderEpochError(BrokerResponseError):
    errno = 74
    message = "FENCED_LEADER_EPOCH"
    description = (
        "The leader epoch in the request is older than the epoch on the broker."
    )


class UnknownLeaderEpochError(BrokerResponseError):
    errno = 75
    message = "UNKNOWN_LEADER_EPOCH"
    description = (
        "The leader epoch in the request is newer than the epoch on the broker."
    )


def _iter_broker_errors() -> Iterable[Type[BrokerResponseError]]:
    for name, obj in inspect.getmembers(sys.modules[__name__]):
        if (
            inspect.isclass(obj)
            and issubclass(obj, BrokerResponseError)
            and obj != BrokerResponseError
        ):
            yield obj


kafka_errors = {x.errno: x for x in _iter_broker_errors()}


def for_code(error_code: int) -> Type[BrokerResponseError]:
    return kafka_errors.get(error_code, UnknownError)
