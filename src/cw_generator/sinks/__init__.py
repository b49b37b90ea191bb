"""
Sinks Package - output targets for a generated Dataset.

Modules:
- dump: JSON document on disk (dump_dataset / load_dataset)
- push: dependency-ordered concurrent inserts into a RecordStore
"""

from .dump import DatasetEncoder, dump_dataset, load_dataset
from .push import PostgresStore, RecordStore, push_dataset

__all__ = [
    "DatasetEncoder",
    "dump_dataset",
    "load_dataset",
    "PostgresStore",
    "RecordStore",
    "push_dataset",
]
