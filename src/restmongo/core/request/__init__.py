"""Request descriptors: declare what a resource accepts, decode and validate requests."""

from restmongo.core.request.api import ResourceApi, RestfulApi
from restmongo.core.request.bag import ErrorBag
from restmongo.core.request.fields import ROOT_NAMESPACE, FieldSelector, parse_fields
from restmongo.core.request.filters import ResourceFilter
from restmongo.core.request.models import (
    FieldObject,
    FieldStructure,
    FilterEntry,
    OffsetPaginate,
    Search,
    Sort,
)
from restmongo.core.request.pagination import ResourceOffsetPaginator
from restmongo.core.request.search import ResourceSearch
from restmongo.core.request.sort import ResourceSort

__all__ = [
    "ROOT_NAMESPACE",
    "ErrorBag",
    "FieldObject",
    "FieldSelector",
    "FieldStructure",
    "FilterEntry",
    "OffsetPaginate",
    "ResourceApi",
    "ResourceFilter",
    "ResourceOffsetPaginator",
    "ResourceSearch",
    "ResourceSort",
    "RestfulApi",
    "Search",
    "Sort",
    "parse_fields",
]
