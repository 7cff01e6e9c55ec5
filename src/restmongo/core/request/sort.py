"""Sorting: `?sort=created_at&direction=desc`."""

from typing import Any, Iterable, Optional

from .bag import ErrorBag
from .models import Sort

SORT_DIRECTIONS = ("asc", "desc")


class ResourceSort:
    component = "sort"

    def __init__(
        self,
        sort_fields: Iterable[str],
        raw_field: Any = None,
        raw_direction: Any = None,
        default_field: Optional[str] = None,
        default_direction: str = "asc",
    ):
        self.sort_fields = list(sort_fields)
        self.field = raw_field if raw_field not in (None, "") else default_field
        direction = raw_direction if raw_direction not in (None, "") else default_direction
        self.direction = direction.lower() if isinstance(direction, str) else direction

    def sort(self) -> Sort:
        if self.direction not in SORT_DIRECTIONS or not isinstance(self.field, str):
            return Sort()
        return Sort(sort_field=self.field, direction=self.direction)

    def validate(self) -> ErrorBag:
        bag = ErrorBag()

        if self.field is not None and not isinstance(self.field, str):
            bag.add(self.component, "Sort field must be a string")
        elif self.field and self.field not in self.sort_fields:
            bag.add(self.component, f"Sorting by '{self.field}' is not allowed")
        if self.direction not in SORT_DIRECTIONS:
            bag.add(self.component, f"Sort direction must be 'asc' or 'desc', got {self.direction!r}")

        return bag
