"""Offset pagination: `?limit=10&offset=20`."""

from typing import Any, Optional

from .bag import ErrorBag
from .models import OffsetPaginate


class ResourceOffsetPaginator:
    component = "pagination"

    def __init__(self, max_limit: int, limit: Any = None, offset: Any = None):
        self.max_limit = max_limit
        self._bag = ErrorBag()
        self._limit = self._to_int("limit", limit)
        self._offset = self._to_int("offset", offset)

    def _to_int(self, name: str, raw: Any) -> Optional[int]:
        if raw is None or raw == "":
            return None
        if isinstance(raw, int) and not isinstance(raw, bool):
            return raw
        if isinstance(raw, float) and raw.is_integer():
            return int(raw)
        if isinstance(raw, str):
            try:
                return int(raw.strip())
            except ValueError:
                pass
        self._bag.add(self.component, f"'{name}' must be an integer, got {raw!r}")
        return None

    def offset_paginate(self) -> OffsetPaginate:
        return OffsetPaginate(limit=self._limit, offset=self._offset)

    def validate(self) -> ErrorBag:
        bag = ErrorBag().merge(self._bag)

        if self._limit is not None:
            if self._limit < 0:
                bag.add(self.component, "'limit' must be non-negative")
            elif self.max_limit and self._limit > self.max_limit:
                bag.add(self.component, f"'limit' must not exceed {self.max_limit}")
        if self._offset is not None and self._offset < 0:
            bag.add(self.component, "'offset' must be non-negative")

        return bag
