"""
Push sink: write a Dataset into a live store, one dependency group at a time.

Within a group every insert is submitted concurrently; the next group only
starts once the whole group is durable, because its foreign keys point into
the groups before it. The first failed insert aborts the push.

Usage:
    store = PostgresStore.connect(host="localhost", port=5432, user="postgres",
                                  password="postgres", database="shop")
    try:
        push_dataset(dataset, store, max_workers=8)
    finally:
        store.close()
"""

import logging
import time
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import fields
from enum import Enum
from typing import Any, Protocol

import psycopg2
import psycopg2.extras
from psycopg2 import sql
from psycopg2.pool import ThreadedConnectionPool

from ..errors import PushError
from ..models import Dataset
from ..pipeline import iter_groups

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8

# Columns filled by database defaults/triggers
SKIPPED_COLUMNS = frozenset({"meta"})


class RecordStore(Protocol):
    """Anything that can durably insert one record into a named table."""

    def insert(self, table: str, record: Any) -> None:
        ...


def record_columns(record: Any) -> tuple[list[str], list[Any]]:
    """
    Column names and bind values for a record.

    Enum members are bound by their value (the PostgreSQL enum label).
    """
    columns, values = [], []
    for f in fields(record):
        if f.name in SKIPPED_COLUMNS:
            continue
        value = getattr(record, f.name)
        if isinstance(value, Enum):
            value = value.value
        columns.append(f.name)
        values.append(value)
    return columns, values


class PostgresStore:
    """
    RecordStore backed by a psycopg2 thread-safe connection pool.

    Each insert borrows a connection, runs one autocommitted INSERT and
    returns the connection to the pool.
    """

    def __init__(self, pool: ThreadedConnectionPool) -> None:
        self._pool = pool

    @classmethod
    def connect(
        cls,
        host: str,
        port: int,
        user: str,
        password: str,
        database: str,
        max_connections: int = DEFAULT_MAX_WORKERS,
    ) -> "PostgresStore":
        psycopg2.extras.register_uuid()
        pool = ThreadedConnectionPool(
            1,
            max_connections,
            host=host,
            port=port,
            user=user,
            password=password,
            dbname=database,
        )
        return cls(pool)

    def insert(self, table: str, record: Any) -> None:
        columns, values = record_columns(record)
        query = sql.SQL("INSERT INTO {table} ({columns}) VALUES ({params})").format(
            table=sql.Identifier(table),
            columns=sql.SQL(", ").join(sql.Identifier(c) for c in columns),
            params=sql.SQL(", ").join(sql.Placeholder() * len(values)),
        )

        conn = self._pool.getconn()
        try:
            conn.autocommit = True
            with conn.cursor() as cur:
                cur.execute(query, values)
        finally:
            self._pool.putconn(conn)

    def close(self) -> None:
        self._pool.closeall()


def push_dataset(
    dataset: Dataset,
    store: RecordStore,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> int:
    """
    Insert every record of ``dataset`` into ``store`` in dependency order.

    Args:
        dataset: Generated dataset
        store: Target store
        max_workers: Concurrent inserts per group

    Returns:
        Number of records inserted

    Raises:
        PushError: On the first failed insert; no later group is started
    """
    if max_workers < 1:
        raise ValueError(f"max_workers must be positive, got {max_workers}")

    inserted = 0
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        for index, collections in iter_groups(dataset):
            group_start = time.time()
            pending = {}
            for name, records in collections:
                for record in records:
                    future = executor.submit(store.insert, record.TABLE, record)
                    pending[future] = (name, record)

            done, not_done = wait(pending, return_when=FIRST_EXCEPTION)
            for future in done:
                error = future.exception()
                if error is not None:
                    for queued in not_done:
                        queued.cancel()
                    name, record = pending[future]
                    raise PushError(index, name, record, error) from error

            inserted += len(pending)
            logger.info(
                "Pushed group %d (%d records) in %.2fs",
                index,
                len(pending),
                time.time() - group_start,
            )

    return inserted
