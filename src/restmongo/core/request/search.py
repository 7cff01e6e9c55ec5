"""Keyword search on the declared search condition: `?search=widget`."""

from typing import Any

from .bag import ErrorBag
from .models import Search


class ResourceSearch:
    component = "search"

    def __init__(self, search_condition: str, raw: Any = None):
        self.search_condition = search_condition
        self.raw = raw

    def search(self) -> Search:
        # No keyword, nothing to search on.
        if not isinstance(self.raw, str) or not self.raw:
            return Search()
        return Search(search_condition=self.search_condition, search_value=self.raw)

    def validate(self) -> ErrorBag:
        bag = ErrorBag()
        if self.raw is not None and not isinstance(self.raw, str):
            bag.add(self.component, "Search value must be a string")
        return bag
