"""Core utilities for restmongo."""

from restmongo.core.config import ParamNames, RestMongoConfig
from restmongo.core.errors import (
    ComponentNotUsedError,
    InvalidOperatorError,
    RestfulApiError,
    RestMongoError,
)
from restmongo.core.logging import Logger, color_palette, log

__all__ = [
    "ComponentNotUsedError",
    "InvalidOperatorError",
    "Logger",
    "ParamNames",
    "RestMongoConfig",
    "RestMongoError",
    "RestfulApiError",
    "color_palette",
    "log",
]
