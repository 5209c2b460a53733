import logging
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import NamedTuple, Optional, overload

from typing_extensions import Self

from kfetches.errors import ClientClosedError, IllegalStateError
from kfetches.structs import FetchError, Record

__all__ = [
    "FetchPartition",
    "FetchTopic",
    "FetchTopicPartition",
    "Fetch",
    "Fetches",
    "FetchesRecordIter",
]

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchPartition:
    """A fetch response for one partition of a topic from a broker"""

    partition: int
    "The partition id"

    err: Optional[BaseException] = None
    """The error this partition was fetched with, if any.

    If this is a fatal error, such as data loss or a non retriable broker
    error, the partition will not be fetched again.
    """

    high_watermark: int = 0
    "The offset replicated to all in sync replicas"

    last_stable_offset: int = 0
    """The offset below which all records are decided.

    Transactional records are decided once they are committed or aborted.
    Always at or under :attr:`high_watermark`.
    """

    log_start_offset: int = 0
    "The earliest offset in the partition (the low watermark)"

    records: Sequence[Record] = ()
    "The records fetched for this partition, in offset order"

    def each_record(self, fn: Callable[[Record], object]) -> None:
        for record in self.records:
            fn(record)


@dataclass(frozen=True)
class FetchTopic:
    """A fetch response for one topic from a broker"""

    topic: str
    "The topic name"

    partitions: Sequence[FetchPartition] = ()
    "The partitions of this topic that were fetched"

    def each_partition(self, fn: Callable[[FetchPartition], object]) -> None:
        for partition in self.partitions:
            fn(partition)

    def each_record(self, fn: Callable[[Record], object]) -> None:
        for partition in self.partitions:
            for record in partition.records:
                fn(record)

    def records(self) -> list[Record]:
        records: list[Record] = []
        for partition in self.partitions:
            records.extend(partition.records)
        return records


class FetchTopicPartition(NamedTuple):
    """A topic name paired with one of its fetched partitions"""

    topic: str
    "The topic name"

    partition: FetchPartition
    "The fetched partition"

    def each_record(self, fn: Callable[[Record], object]) -> None:
        self.partition.each_record(fn)


@dataclass(frozen=True)
class Fetch:
    """An individual fetch response from a broker"""

    topics: Sequence[FetchTopic] = ()
    "All topics in this response"


class FetchesRecordIter:
    """Iterates over every record of a :class:`Fetches` batch.

    The iterator walks responses, then topics, then partitions, then records,
    skipping empty topics and partitions as it goes. It is single pass and
    must not be shared between threads.

    Usage::

        it = fetches.record_iter()
        while not it.done():
            record = it.next()
    """

    __slots__ = ("_fetches", "_num_fetches", "_fi", "_ti", "_pi", "_ri")

    def __init__(self, fetches: Sequence[Fetch]) -> None:
        self._fetches = fetches
        self._num_fetches = len(fetches)
        self._fi = 0  # index to current fetch
        self._ti = 0  # index to current topic in current fetch
        self._pi = 0  # index to current partition in current topic
        self._ri = 0  # index to current record in current partition
        self._prepare_next()

    def done(self) -> bool:
        """Whether there are no more records to iterate over"""
        return self._fi >= self._num_fetches

    def next(self) -> Record:
        """Return the next record.

        Raises:
            IllegalStateError: the iterator is :meth:`done`.
        """
        if self._fi >= self._num_fetches:
            raise IllegalStateError("Record iterator is exhausted")
        record = (
            self._fetches[self._fi]
            .topics[self._ti]
            .partitions[self._pi]
            .records[self._ri]
        )
        self._ri += 1
        self._prepare_next()
        return record

    def _prepare_next(self) -> None:
        # Move the cursor forward until it points at a record, or past the
        # last fetch.
        fetches = self._fetches
        num_fetches = self._num_fetches
        fi, ti, pi, ri = self._fi, self._ti, self._pi, self._ri
        while fi < num_fetches:
            topics = fetches[fi].topics
            if ti >= len(topics):
                fi += 1
                ti = 0
                continue
            partitions = topics[ti].partitions
            if pi >= len(partitions):
                ti += 1
                pi = 0
                continue
            if ri >= len(partitions[pi].records):
                pi += 1
                ri = 0
                continue
            break
        self._fi, self._ti, self._pi, self._ri = fi, ti, pi, ri

    def __iter__(self) -> Self:
        return self

    def __next__(self) -> Record:
        if self._fi >= self._num_fetches:
            raise StopIteration
        return self.next()

    def __repr__(self) -> str:
        return (
            f"<FetchesRecordIter fetch={self._fi} topic={self._ti}"
            f" partition={self._pi} record={self._ri}>"
        )


class Fetches(Sequence[Fetch]):
    """A batch of fetch responses from brokers.

    The batch is a read-only snapshot; none of the traversal helpers modify
    it. Partition errors are never raised by the helpers, inspect them with
    :meth:`errors` or :meth:`each_err`.
    """

    __slots__ = ("_fetches",)

    def __init__(self, fetches: Sequence[Fetch] = ()) -> None:
        self._fetches = tuple(fetches)

    @classmethod
    def from_error(
        cls, err: BaseException, topic: str = "", partition: int = -1
    ) -> Self:
        """Return a batch holding only ``err`` on a single partition"""
        return cls(
            [Fetch([FetchTopic(topic, [FetchPartition(partition, err=err)])])]
        )

    @overload
    def __getitem__(self, index: int) -> Fetch: ...

    @overload
    def __getitem__(self, index: slice) -> "Fetches": ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Fetches(self._fetches[index])
        return self._fetches[index]

    def __len__(self) -> int:
        return len(self._fetches)

    def __iter__(self) -> Iterator[Fetch]:
        return iter(self._fetches)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Fetches):
            return self._fetches == other._fetches
        return NotImplemented

    def __repr__(self) -> str:
        return f"Fetches({list(self._fetches)!r})"

    def is_client_closed(self) -> bool:
        """Whether this batch only reports that the client was closed"""
        if len(self._fetches) != 1:
            return False
        topics = self._fetches[0].topics
        if len(topics) != 1 or len(topics[0].partitions) != 1:
            return False
        return isinstance(topics[0].partitions[0].err, ClientClosedError)

    def each_err(self, fn: Callable[[str, int, BaseException], object]) -> None:
        """Call ``fn`` with topic, partition and error for every partition
        that failed in this batch.

        All errors are reported, in fetch order. There are three kinds:

        1. a :class:`~kfetches.errors.BrokerResponseError`; usually non
           retriable, although some (authorization, for example) can be fixed
           at runtime. The partition is not fetched again.
        2. a :class:`~kfetches.errors.DataLossError`; informational, the
           fetching layer already reset the partition and keeps consuming.
        3. any other exception, typically a record batch that failed to
           parse. Restarting rarely helps and the partition may need a
           manual repair.
        """
        for fetch in self._fetches:
            for topic in fetch.topics:
                for partition in topic.partitions:
                    if partition.err is not None:
                        fn(topic.topic, partition.partition, partition.err)

    def errors(self) -> list[FetchError]:
        """Return every partition error in this batch, see :meth:`each_err`"""
        errs: list[FetchError] = []
        self.each_err(lambda t, p, err: errs.append(FetchError(t, p, err)))
        if errs:
            log.debug("Collected %d partition errors from fetches", len(errs))
        return errs

    def err(self) -> Optional[BaseException]:
        """Return the first partition error in this batch, if any"""
        for fetch in self._fetches:
            for topic in fetch.topics:
                for partition in topic.partitions:
                    if partition.err is not None:
                        return partition.err
        return None

    def record_iter(self) -> FetchesRecordIter:
        """Return a fresh iterator over all records in this batch.

        Note that errors should be inspected as well.
        """
        return FetchesRecordIter(self._fetches)

    def each_record(self, fn: Callable[[Record], object]) -> None:
        """Call ``fn`` for every record in this batch, in fetch order"""
        it = FetchesRecordIter(self._fetches)
        while not it.done():
            fn(it.next())

    def records(self) -> list[Record]:
        return list(FetchesRecordIter(self._fetches))

    def num_records(self) -> int:
        n = 0
        for fetch in self._fetches:
            for topic in fetch.topics:
                for partition in topic.partitions:
                    n += len(partition.records)
        return n

    def empty(self) -> bool:
        return FetchesRecordIter(self._fetches).done()

    def each_partition(self, fn: Callable[[FetchTopicPartition], object]) -> None:
        """Call ``fn`` for every partition in this batch.

        A topic is passed once per response it appears in, partitions of the
        same topic are not grouped.
        """
        for fetch in self._fetches:
            for topic in fetch.topics:
                for partition in topic.partitions:
                    fn(FetchTopicPartition(topic.topic, partition))

    def each_topic(self, fn: Callable[[FetchTopic], object]) -> None:
        """Call ``fn`` once per topic in this batch.

        Partitions of the same topic from different responses are grouped
        into one :class:`FetchTopic`. Do not rely on the order topics are
        passed in.
        """
        if not self._fetches:
            return
        if len(self._fetches) == 1:
            for topic in self._fetches[0].topics:
                fn(topic)
            return

        log.debug("Merging topics of %d fetch responses", len(self._fetches))
        topics: dict[str, list[FetchPartition]] = {}
        for fetch in self._fetches:
            for topic in fetch.topics:
                topics.setdefault(topic.topic, []).extend(topic.partitions)

        for name, partitions in topics.items():
            fn(FetchTopic(name, partitions))
