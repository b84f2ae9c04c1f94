"""Association extraction from flat route records."""

from typing import Iterable, List, Set, Tuple

from .errors import MissingFieldError
from .graph_model import Category, Record

Association = Tuple[str, str]


def extract_associations(
    records: Iterable[Record],
    category1: Category,
    category2: Category,
) -> List[Association]:
    """Return distinct (category1 value, category2 value) pairs in first-seen order.

    Values are compared as strings. A record without one of the selected
    fields (absent key or ``None``) raises :class:`MissingFieldError`.
    """
    field1 = category1.field_name
    field2 = category2.field_name
    seen: Set[Association] = set()
    associations: List[Association] = []

    for row_index, record in enumerate(records):
        pair = (_field_value(record, field1, row_index), _field_value(record, field2, row_index))
        if pair in seen:
            continue
        seen.add(pair)
        associations.append(pair)
    return associations


def _field_value(record: Record, field_name: str, row_index: int) -> str:
    value = record.get(field_name)
    if value is None:
        raise MissingFieldError(field_name, row_index)
    return str(value)
