"""Collected validation errors for a request."""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class ErrorBag(BaseModel):
    """Validation errors grouped by the request component that produced them."""

    errors: Dict[str, List[str]] = Field(default_factory=dict)

    def add(self, component: str, message: str) -> "ErrorBag":
        self.errors.setdefault(component, []).append(message)
        return self

    def merge(self, other: Optional["ErrorBag"]) -> "ErrorBag":
        if other is not None:
            for component, messages in other.errors.items():
                for message in messages:
                    self.add(component, message)
        return self

    def passes(self) -> bool:
        return not any(self.errors.values())

    def fails(self) -> bool:
        return not self.passes()

    def messages(self) -> List[str]:
        """All messages, prefixed by their component name."""
        return [
            f"{component}: {message}"
            for component, messages in self.errors.items()
            for message in messages
        ]
