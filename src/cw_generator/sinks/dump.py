"""
Dump sink: serialise a Dataset to one JSON document and read it back.

The document is a single object with the twenty collection names as keys,
each an array of records serialised field-for-field. UUIDs, Decimals,
datetimes and enums are written as strings; MetaTime as a nested object.
"""

import json
import logging
import typing
from dataclasses import fields, is_dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any
from uuid import UUID

from ..models import COLLECTION_TYPES, COLLECTIONS, Dataset
from ..types import MetaTime

logger = logging.getLogger(__name__)


class DatasetEncoder(json.JSONEncoder):
    """JSON encoder for record field values."""

    def default(self, o: Any) -> Any:
        if isinstance(o, UUID):
            return str(o)
        if isinstance(o, Decimal):
            return str(o)
        if isinstance(o, datetime):
            return o.isoformat()
        if isinstance(o, Enum):
            return o.value
        if is_dataclass(o):
            return {f.name: getattr(o, f.name) for f in fields(o)}
        return super().default(o)


def dataset_to_dict(dataset: Dataset) -> dict[str, list[Any]]:
    return {name: list(records) for name, records in dataset.collections()}


def dump_dataset(dataset: Dataset, path: Path | str, indent: int | None = 2) -> Path:
    """
    Write ``dataset`` as JSON to ``path``.

    Returns:
        The path written
    """
    path = Path(path)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(dataset_to_dict(dataset), f, cls=DatasetEncoder, ensure_ascii=False, indent=indent)

    logger.info("Dumped %d rows to %s", dataset.total_rows(), path)
    return path


def _decode_value(value: Any, hint: Any) -> Any:
    """Convert one JSON value back to the field's declared type."""
    if value is None:
        return None

    # Optional[X] / X | None
    args = [a for a in typing.get_args(hint) if a is not type(None)]
    if args and typing.get_origin(hint) is not list:
        hint = args[0]

    if hint is UUID:
        return UUID(value)
    if hint is Decimal:
        return Decimal(value)
    if hint is datetime:
        return datetime.fromisoformat(value)
    if hint is MetaTime:
        return MetaTime(
            created=datetime.fromisoformat(value["created"]),
            updated=datetime.fromisoformat(value["updated"]),
        )
    if isinstance(hint, type) and issubclass(hint, Enum):
        return hint(value)
    return value


def _decode_record(record_type: type, data: dict[str, Any]) -> Any:
    hints = typing.get_type_hints(record_type)
    kwargs = {f.name: _decode_value(data[f.name], hints[f.name]) for f in fields(record_type)}
    return record_type(**kwargs)


def load_dataset(path: Path | str) -> Dataset:
    """
    Read a document written by dump_dataset back into typed records.

    Raises:
        ValueError: If the document does not hold exactly the twenty collections
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if set(data) != set(COLLECTIONS):
        missing = sorted(set(COLLECTIONS) - set(data))
        extra = sorted(set(data) - set(COLLECTIONS))
        raise ValueError(f"Malformed dump {path}: missing={missing}, unexpected={extra}")

    return Dataset(
        **{
            name: [_decode_record(COLLECTION_TYPES[name], row) for row in data[name]]
            for name in COLLECTIONS
        }
    )
