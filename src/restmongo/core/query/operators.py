# src/restmongo/core/query/operators.py
import re
from dataclasses import dataclass
from enum import Enum
from typing import Union


class FilterOperator(str, Enum):
    """Filter operators that translate to a dedicated builder method."""

    IN = "in"
    NOT_IN = "not_in"
    BETWEEN = "between"
    NOT_BETWEEN = "not_between"
    CONTAINS = "contains"


@dataclass(frozen=True)
class Comparison:
    """Any other operator, handed to `where()` exactly as the request spelled it."""

    operator: str


ParsedOperator = Union[FilterOperator, Comparison]


def parse_operator(raw: str) -> ParsedOperator:
    try:
        return FilterOperator(raw)
    except ValueError:
        return Comparison(raw)


# Maps comparison operators from API requests to MongoDB query operators.
# For example, `filtering[age:gte]=18` compiles to `{"age": {"$gte": 18}}`.
COMPARISON_OPERATORS = {
    'eq': '$eq',     # Equal
    '=': '$eq',
    'ne': '$ne',     # Not Equal
    '!=': '$ne',
    '<>': '$ne',
    'gt': '$gt',     # Greater Than
    '>': '$gt',
    'gte': '$gte',   # Greater Than or Equal
    '>=': '$gte',
    'lt': '$lt',     # Less Than
    '<': '$lt',
    'lte': '$lte',   # Less Than or Equal
    '<=': '$lte',
}

# Pattern operators understood by `where()`.
LIKE_OPERATORS = {'like', 'not like'}

# Operators that expect a list of values, typically comma-separated.
LIST_OPERATORS = {FilterOperator.IN.value, FilterOperator.NOT_IN.value}

# Operators that expect exactly two values: [low, high].
RANGE_OPERATORS = {FilterOperator.BETWEEN.value, FilterOperator.NOT_BETWEEN.value}

# Everything a request may ask for in a filter key.
REQUEST_OPERATORS = (
    {op.value for op in FilterOperator}
    | {'eq', 'ne', 'gt', 'gte', 'lt', 'lte'}
)


def like_to_regex(pattern: str) -> str:
    """
    Converts a SQL LIKE pattern into a MongoDB regular expression.

    `%` matches any run of characters; everything else is matched literally.
    The expression is anchored unless the pattern starts or ends with `%`.
    """
    parts = [re.escape(part) for part in str(pattern).split('%')]
    regex = '.*'.join(parts)

    if not str(pattern).startswith('%'):
        regex = '^' + regex
    else:
        regex = regex[2:]
    if not str(pattern).endswith('%'):
        regex = regex + '$'
    elif regex.endswith('.*'):
        regex = regex[:-2]

    return regex
