"""Resource filtering: `?filtering[status:in]=active,pending&filtering[age:gte]=18`."""

from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from ..errors import RestfulApiError
from ..query.operators import LIST_OPERATORS, RANGE_OPERATORS, REQUEST_OPERATORS
from .bag import ErrorBag
from .models import FilterEntry

DEFAULT_OPERATOR = "eq"


def split_filter_key(key: str) -> tuple[str, str]:
    """`"status:in"` -> `("status", "in")`; a bare field name means equality."""
    field, sep, operator = key.partition(":")
    return field.strip(), (operator.strip() if sep else DEFAULT_OPERATOR)


def _as_list(value: Any) -> Any:
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    if isinstance(value, tuple):
        return list(value)
    return value


class ResourceFilter:
    """
    Decodes and validates the filtering part of a request.

    `types` maps a field to a converter (e.g. `int`) applied to the string
    values given for it, so query string input compares against typed data.
    """

    component = "filtering"

    def __init__(
        self,
        allowed: Mapping[str, Iterable[str]],
        raw: Any = None,
        types: Optional[Mapping[str, Callable[[str], Any]]] = None,
    ):
        self.allowed: Dict[str, List[str]] = {
            field: list(operators) for field, operators in allowed.items()
        }
        self.types = dict(types or {})
        self._bag = ErrorBag()
        self._entries = self._decode(raw)

    def _decode(self, raw: Any) -> List[FilterEntry]:
        if raw is None:
            return []
        if not isinstance(raw, Mapping):
            raise RestfulApiError(
                f"Filtering must be a mapping of 'field:operator' to value, got {type(raw).__name__}",
                self.component,
            )

        entries = []
        for key, value in raw.items():
            if not isinstance(key, str) or not key.strip():
                raise RestfulApiError(f"Invalid filtering key {key!r}", self.component)
            field, operator = split_filter_key(key)
            if operator in LIST_OPERATORS or operator in RANGE_OPERATORS:
                value = _as_list(value)
            if field in self.types:
                value = self._convert(key, self.types[field], value)
            entries.append(FilterEntry(filtering=field, operator=operator, value=value))
        return entries

    def _convert(self, label: str, converter: Callable[[str], Any], value: Any) -> Any:
        if isinstance(value, list):
            return [self._convert(label, converter, item) for item in value]
        if not isinstance(value, str):
            return value
        try:
            return converter(value.strip())
        except (TypeError, ValueError, ArithmeticError):
            name = getattr(converter, "__name__", repr(converter))
            self._bag.add(self.component, f"'{label}' expects {name} values, got {value!r}")
            return value

    def filtering(self) -> List[FilterEntry]:
        return list(self._entries)

    def validate(self) -> ErrorBag:
        bag = ErrorBag().merge(self._bag)

        for entry in self._entries:
            label = f"{entry.filtering}:{entry.operator}"
            if entry.filtering not in self.allowed:
                bag.add(self.component, f"Filtering on '{entry.filtering}' is not allowed")
                continue
            if entry.operator not in REQUEST_OPERATORS:
                bag.add(self.component, f"Unknown operator '{entry.operator}' in '{label}'")
                continue
            if entry.operator not in self.allowed[entry.filtering]:
                bag.add(
                    self.component,
                    f"Operator '{entry.operator}' is not allowed on '{entry.filtering}'",
                )
                continue

            if entry.operator in LIST_OPERATORS:
                if not isinstance(entry.value, list) or not entry.value:
                    bag.add(self.component, f"'{label}' expects a non-empty list of values")
            elif entry.operator in RANGE_OPERATORS:
                if not isinstance(entry.value, list) or len(entry.value) != 2:
                    bag.add(self.component, f"'{label}' expects exactly two values")
            elif isinstance(entry.value, (list, dict)):
                bag.add(self.component, f"'{label}' expects a single value")

        return bag
