"""Exception types raised by restmongo."""

from typing import Optional


class RestMongoError(Exception):
    """Base class for every error raised by this package."""


class RestfulApiError(RestMongoError):
    """Raised when raw request input is structurally invalid for an API declaration."""

    def __init__(self, message: str, component: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.component = component


class InvalidOperatorError(RestMongoError, ValueError):
    """Raised when a query builder is asked to compile an operator it does not know."""

    def __init__(self, operator: str):
        super().__init__(f"Unsupported query operator: '{operator}'")
        self.operator = operator


class ComponentNotUsedError(RestMongoError, LookupError):
    """Raised when asking a request descriptor for a component its API does not declare."""

    def __init__(self, component: str, api_name: str):
        super().__init__(f"{api_name} does not use the {component} component")
        self.component = component
        self.api_name = api_name
