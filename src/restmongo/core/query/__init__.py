"""Query translation: filter operators and the query builder capability."""

from restmongo.core.query.builder import MongoQueryBuilder, QueryBuilder
from restmongo.core.query.operators import (
    COMPARISON_OPERATORS,
    LIST_OPERATORS,
    RANGE_OPERATORS,
    Comparison,
    FilterOperator,
    like_to_regex,
    parse_operator,
)

__all__ = [
    "COMPARISON_OPERATORS",
    "LIST_OPERATORS",
    "RANGE_OPERATORS",
    "Comparison",
    "FilterOperator",
    "MongoQueryBuilder",
    "QueryBuilder",
    "like_to_regex",
    "parse_operator",
]
# The assembler lives in restmongo.core.query.assembler; it depends on
# restmongo.core.request, which in turn imports the operators above.
