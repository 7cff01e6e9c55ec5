# src/restmongo/core/query/builder.py
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple, runtime_checkable

from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection

from ..errors import InvalidOperatorError
from .operators import COMPARISON_OPERATORS, LIKE_OPERATORS, like_to_regex

SORT_DIRECTIONS = {'asc': ASCENDING, 'desc': DESCENDING}


@runtime_checkable
class QueryBuilder(Protocol):
    """
    The capability set the query assembler drives.

    Any adapter implementing these methods can receive translated requests;
    every method returns the builder so calls can be chained.
    """

    def add_select(self, field: str) -> "QueryBuilder": ...

    def where(self, field: str, operator: str, value: Any) -> "QueryBuilder": ...

    def where_in(self, field: str, values: Sequence[Any]) -> "QueryBuilder": ...

    def where_not_in(self, field: str, values: Sequence[Any]) -> "QueryBuilder": ...

    def where_between(self, field: str, values: Sequence[Any]) -> "QueryBuilder": ...

    def where_not_between(self, field: str, values: Sequence[Any]) -> "QueryBuilder": ...

    def order_by(self, field: str, direction: str = 'asc') -> "QueryBuilder": ...

    def limit(self, value: int) -> "QueryBuilder": ...

    def offset(self, value: int) -> "QueryBuilder": ...


def _range_bounds(field: str, values: Sequence[Any]) -> Tuple[Any, Any]:
    values = list(values)
    if len(values) != 2:
        raise ValueError(
            f"Range filter on '{field}' needs exactly two values, got {len(values)}"
        )
    return values[0], values[1]


class MongoQueryBuilder:
    """
    Accumulates constraints for a single `find()` call on a pymongo collection.

    Nothing touches the database until `get()`, `first()` or `count()` runs.
    """

    def __init__(self, collection: Collection):
        self.collection = collection
        self._projection: List[str] = []
        self._wheres: List[Dict[str, Any]] = []
        self._sort: List[Tuple[str, int]] = []
        self._limit: Optional[int] = None
        self._skip: Optional[int] = None

    # ===== Constraint methods =====

    def add_select(self, field: str) -> "MongoQueryBuilder":
        if field not in self._projection:
            self._projection.append(field)
        return self

    def where(self, field: str, operator: str, value: Any) -> "MongoQueryBuilder":
        op = operator.lower()

        if op in LIKE_OPERATORS:
            pattern = {'$regex': like_to_regex(value), '$options': 'i'}
            self._wheres.append({field: {'$not': pattern} if op == 'not like' else pattern})
        elif op in COMPARISON_OPERATORS:
            mongo_op = COMPARISON_OPERATORS[op]
            if mongo_op == '$eq':
                self._wheres.append({field: value})
            else:
                self._wheres.append({field: {mongo_op: value}})
        else:
            raise InvalidOperatorError(operator)

        return self

    def where_in(self, field: str, values: Sequence[Any]) -> "MongoQueryBuilder":
        self._wheres.append({field: {'$in': list(values)}})
        return self

    def where_not_in(self, field: str, values: Sequence[Any]) -> "MongoQueryBuilder":
        self._wheres.append({field: {'$nin': list(values)}})
        return self

    def where_between(self, field: str, values: Sequence[Any]) -> "MongoQueryBuilder":
        low, high = _range_bounds(field, values)
        self._wheres.append({field: {'$gte': low, '$lte': high}})
        return self

    def where_not_between(self, field: str, values: Sequence[Any]) -> "MongoQueryBuilder":
        low, high = _range_bounds(field, values)
        self._wheres.append({'$or': [{field: {'$lt': low}}, {field: {'$gt': high}}]})
        return self

    def order_by(self, field: str, direction: str = 'asc') -> "MongoQueryBuilder":
        key = str(direction).lower()
        if key not in SORT_DIRECTIONS:
            raise ValueError(f"Order direction must be 'asc' or 'desc', got '{direction}'")
        self._sort.append((field, SORT_DIRECTIONS[key]))
        return self

    def limit(self, value: int) -> "MongoQueryBuilder":
        if value < 0:
            raise ValueError("Limit must be non-negative")
        self._limit = value
        return self

    def offset(self, value: int) -> "MongoQueryBuilder":
        if value < 0:
            raise ValueError("Offset must be non-negative")
        self._skip = value
        return self

    # ===== Compilation =====

    def compile_filter(self) -> Dict[str, Any]:
        """Combines every accumulated constraint into one filter document (logical AND)."""
        if not self._wheres:
            return {}
        if len(self._wheres) == 1:
            return dict(self._wheres[0])
        return {'$and': [dict(where) for where in self._wheres]}

    def compile_projection(self) -> Optional[Dict[str, int]]:
        if not self._projection:
            return None
        return {field: 1 for field in self._projection}

    def to_find_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for `Collection.find()`, leaving out unset parts."""
        kwargs: Dict[str, Any] = {'filter': self.compile_filter()}

        projection = self.compile_projection()
        if projection is not None:
            kwargs['projection'] = projection
        if self._sort:
            kwargs['sort'] = list(self._sort)
        if self._skip:
            kwargs['skip'] = self._skip
        if self._limit:
            kwargs['limit'] = self._limit

        return kwargs

    # ===== Execution =====

    def get(self) -> List[Dict[str, Any]]:
        return list(self.collection.find(**self.to_find_kwargs()))

    def first(self) -> Optional[Dict[str, Any]]:
        kwargs = self.to_find_kwargs()
        kwargs['limit'] = 1
        return next(iter(self.collection.find(**kwargs)), None)

    def count(self) -> int:
        return self.collection.count_documents(self.compile_filter())

    def __repr__(self) -> str:
        return f"MongoQueryBuilder({self.collection.name!r}, {self.to_find_kwargs()!r})"
