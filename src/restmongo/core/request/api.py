"""
Request descriptors.

A `ResourceApi` subclass declares what a resource endpoint accepts; a
`RestfulApi` decodes one request's raw parameters against that declaration.

    class OrderApi(ResourceApi):
        field_structure = {"id": "atomic", "status": "atomic", "address": {"city": "atomic"}}
        filters = {"status": ["eq", "in"], "total": ["gte", "lte", "between"]}
        filter_types = {"total": int}
        sort_fields = ["created_at", "total"]
        search_condition = "title"
        max_limit = 100
"""

from typing import Any, Callable, ClassVar, Dict, List, Mapping, Optional, Type, TypeVar, Union

from ..config import RestMongoConfig
from ..errors import ComponentNotUsedError, RestfulApiError
from .bag import ErrorBag
from .fields import FieldSelector
from .filters import ResourceFilter
from .pagination import ResourceOffsetPaginator
from .search import ResourceSearch
from .sort import ResourceSort

C = TypeVar("C")


class ResourceApi:
    """
    Declarative base for an API resource.

    Leaving an attribute as None switches the matching component off:
    `field_structure` enables field selection, `filters` filtering,
    `max_limit` offset pagination, `sort_fields` sorting and
    `search_condition` keyword search.

    `filter_types` optionally maps filter fields to converters for string
    values, e.g. `{"total": int}` for query string input.
    """

    field_structure: ClassVar[Optional[Dict[str, Any]]] = None
    filters: ClassVar[Optional[Dict[str, List[str]]]] = None
    filter_types: ClassVar[Optional[Dict[str, Callable[[str], Any]]]] = None
    max_limit: ClassVar[Optional[int]] = None
    sort_fields: ClassVar[Optional[List[str]]] = None
    default_sort: ClassVar[Optional[str]] = None
    default_direction: ClassVar[str] = "asc"
    search_condition: ClassVar[Optional[str]] = None


class RestfulApi:
    """Decoded, validatable view of one request against a ResourceApi."""

    def __init__(
        self,
        api: Union[ResourceApi, Type[ResourceApi]],
        params: Mapping[str, Any],
        config: Optional[RestMongoConfig] = None,
    ):
        if isinstance(api, type):
            if not issubclass(api, ResourceApi):
                raise RestfulApiError(f"{api.__name__} is not a ResourceApi")
            api = api()
        elif not isinstance(api, ResourceApi):
            raise RestfulApiError(f"{type(api).__name__} is not a ResourceApi")
        if not isinstance(params, Mapping):
            raise RestfulApiError(
                f"Request input must be a mapping, got {type(params).__name__}"
            )

        self.api = api
        self.params = dict(params)
        self.config = config or RestMongoConfig()
        self._components: Dict[type, Any] = {}
        self._load_components()

    @classmethod
    def create(
        cls,
        api_class: Union[ResourceApi, Type[ResourceApi]],
        params: Mapping[str, Any],
        config: Optional[RestMongoConfig] = None,
    ) -> "RestfulApi":
        return cls(api_class, params, config)

    def _load_components(self) -> None:
        api, names, params = self.api, self.config.params, self.params

        if api.field_structure is not None:
            self._components[FieldSelector] = FieldSelector(
                api.field_structure, params.get(names.fields)
            )
        if api.filters is not None:
            self._components[ResourceFilter] = ResourceFilter(
                api.filters, params.get(names.filtering), api.filter_types
            )
        if api.max_limit is not None:
            self._components[ResourceOffsetPaginator] = ResourceOffsetPaginator(
                api.max_limit, params.get(names.limit), params.get(names.offset)
            )
        if api.sort_fields is not None:
            self._components[ResourceSort] = ResourceSort(
                api.sort_fields,
                params.get(names.sort),
                params.get(names.direction),
                default_field=api.default_sort,
                default_direction=api.default_direction,
            )
        if api.search_condition is not None:
            self._components[ResourceSearch] = ResourceSearch(
                api.search_condition, params.get(names.search)
            )

    @property
    def api_name(self) -> str:
        return type(self.api).__name__

    def uses(self, component: type) -> bool:
        return component in self._components

    def _component(self, component: Type[C]) -> C:
        if component not in self._components:
            raise ComponentNotUsedError(component.__name__, self.api_name)
        return self._components[component]

    def field_selector(self) -> FieldSelector:
        return self._component(FieldSelector)

    def resource_filter(self) -> ResourceFilter:
        return self._component(ResourceFilter)

    def resource_offset_paginator(self) -> ResourceOffsetPaginator:
        return self._component(ResourceOffsetPaginator)

    def resource_sort(self) -> ResourceSort:
        return self._component(ResourceSort)

    def resource_search(self) -> ResourceSearch:
        return self._component(ResourceSearch)

    def validate(self, error_bag: Optional[ErrorBag] = None) -> ErrorBag:
        """Validates every used component, collecting errors into `error_bag` when given."""
        bag = error_bag if error_bag is not None else ErrorBag()
        for component in self._components.values():
            bag.merge(component.validate())
        return bag
