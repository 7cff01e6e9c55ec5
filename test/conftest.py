from typing import Any, List, Tuple
from unittest.mock import MagicMock

import pytest

from restmongo.core.request import ResourceApi
from restmongo.db import MongoModel


class RecordingBuilder:
    """QueryBuilder stand-in that remembers every call in order."""

    def __init__(self):
        self.calls: List[Tuple[str, tuple]] = []

    def _record(self, name: str, *args: Any) -> "RecordingBuilder":
        self.calls.append((name, args))
        return self

    def add_select(self, field):
        return self._record("add_select", field)

    def where(self, field, operator, value):
        return self._record("where", field, operator, value)

    def where_in(self, field, values):
        return self._record("where_in", field, values)

    def where_not_in(self, field, values):
        return self._record("where_not_in", field, values)

    def where_between(self, field, values):
        return self._record("where_between", field, values)

    def where_not_between(self, field, values):
        return self._record("where_not_between", field, values)

    def order_by(self, field, direction="asc"):
        return self._record("order_by", field, direction)

    def limit(self, value):
        return self._record("limit", value)

    def offset(self, value):
        return self._record("offset", value)


class RecordingModel:
    """Subject whose query() hands out RecordingBuilders and counts them."""

    def __init__(self):
        self.builders: List[RecordingBuilder] = []

    def query(self) -> RecordingBuilder:
        builder = RecordingBuilder()
        self.builders.append(builder)
        return builder


class OrderApi(ResourceApi):
    field_structure = {
        "id": "atomic",
        "name": "atomic",
        "status": "atomic",
        "created_at": "atomic",
        "address": {"city": "atomic", "street": "atomic"},
        "items": [{"sku": "atomic", "qty": "atomic"}],
    }
    filters = {
        "status": ["eq", "ne", "in", "not_in"],
        "total": ["gt", "gte", "lt", "lte", "between", "not_between"],
        "title": ["eq", "contains"],
    }
    filter_types = {"total": int}
    max_limit = 100
    sort_fields = ["created_at", "total"]
    search_condition = "title"


class Order(MongoModel):
    collection_name = "orders"


@pytest.fixture
def recording_model() -> RecordingModel:
    return RecordingModel()


@pytest.fixture
def collection() -> MagicMock:
    collection = MagicMock()
    collection.name = "orders"
    collection.find.return_value = iter([])
    collection.count_documents.return_value = 0
    return collection
