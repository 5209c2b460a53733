import logging

import pytest

from kfetches.errors import CorruptRecordException, NotLeaderForPartitionError

from ._testutil import make_fetches, make_partition, make_record


def pytest_configure(config):
    """Keep library debug logs out of the test output."""
    for name in ["kfetches"]:
        logger = logging.getLogger(name)
        logger.setLevel(logging.INFO)


@pytest.fixture
def records_abc():
    return (
        make_record("t", 0, 0, b"A"),
        make_record("t", 0, 1, b"B"),
        make_record("t", 1, 0, b"C"),
    )


@pytest.fixture
def two_responses(records_abc):
    """Topic "t" spread across two broker responses"""
    a, b, c = records_abc
    return make_fetches(
        [
            {"t": [make_partition("t", 0, records=[a, b])]},
            {"t": [make_partition("t", 1, records=[c])]},
        ]
    )


@pytest.fixture
def sparse_fetches():
    """Empty responses, topics and partitions around a few records"""
    return make_fetches(
        [
            {},
            {"empty": []},
            {
                "a": [make_partition("a", 0), make_partition("a", 1, 2)],
                "b": [make_partition("b", 0)],
            },
            {},
            {
                "a": [make_partition("a", 2, 1, log_start_offset=10)],
                "c": [make_partition("c", 0), make_partition("c", 1, 3)],
            },
            {"d": [make_partition("d", 0)]},
        ]
    )


@pytest.fixture
def failed_fetches():
    return make_fetches(
        [
            {
                "a": [
                    make_partition("a", 0, 2),
                    make_partition("a", 1, err=NotLeaderForPartitionError()),
                ],
            },
            {
                "a": [make_partition("a", 2, err=CorruptRecordException())],
                "b": [
                    make_partition("b", 0, 1),
                    make_partition("b", 1, err=NotLeaderForPartitionError()),
                ],
            },
        ]
    )
