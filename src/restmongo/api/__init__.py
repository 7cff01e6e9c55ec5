"""FastAPI integration for restmongo."""

from restmongo.api.routers.resources import ResourceRouter, collect_params, serialize_document

__all__ = ["ResourceRouter", "collect_params", "serialize_document"]
