# src/restmongo/core/query/assembler.py
from typing import Any, Callable, Dict, Mapping, Optional, Type, Union

from ..config import RestMongoConfig
from ..logging import color_palette, log
from ..request.api import ResourceApi, RestfulApi
from ..request.bag import ErrorBag
from ..request.fields import ROOT_NAMESPACE, FieldSelector
from ..request.filters import ResourceFilter
from ..request.models import FilterEntry
from ..request.pagination import ResourceOffsetPaginator
from ..request.search import ResourceSearch
from ..request.sort import ResourceSort
from .builder import QueryBuilder
from .operators import Comparison, FilterOperator, parse_operator

FilterHandler = Callable[[QueryBuilder, FilterEntry], Any]

# One builder call per operator; anything unlisted is a plain comparison.
FILTER_HANDLERS: Dict[FilterOperator, FilterHandler] = {
    FilterOperator.IN: lambda builder, entry: builder.where_in(entry.filtering, entry.value),
    FilterOperator.NOT_IN: lambda builder, entry: builder.where_not_in(entry.filtering, entry.value),
    FilterOperator.BETWEEN: lambda builder, entry: builder.where_between(entry.filtering, entry.value),
    FilterOperator.NOT_BETWEEN: lambda builder, entry: builder.where_not_between(
        entry.filtering, entry.value
    ),
    FilterOperator.CONTAINS: lambda builder, entry: builder.where(
        entry.filtering, 'like', f"%{entry.value}%"
    ),
}


class QueryAssembler:
    """
    Translates a validated request into calls on a query builder.

    Construction applies, in order, field selection, filtering, pagination,
    sorting and search. Each step runs only when the API declares the
    component and the component's validation passes. Every step mutates the
    same builder, created from the subject on first use.
    """

    def __init__(self, restful_api: RestfulApi, subject: Any):
        self.restful_api = restful_api
        self.subject = subject
        self._builder: Optional[QueryBuilder] = None

        steps = [
            (FieldSelector, restful_api.field_selector, self._handle_field_selector),
            (ResourceFilter, restful_api.resource_filter, self._handle_resource_filter),
            (ResourceOffsetPaginator, restful_api.resource_offset_paginator, self._handle_offset_paginator),
            (ResourceSort, restful_api.resource_sort, self._handle_resource_sort),
            (ResourceSearch, restful_api.resource_search, self._handle_resource_search),
        ]
        for component, accessor, handler in steps:
            if restful_api.uses(component) and accessor().validate().passes():
                handler()

    @classmethod
    def create(
        cls,
        subject: Any,
        api_class: Union[ResourceApi, Type[ResourceApi]],
        params: Mapping[str, Any],
        config: Optional[RestMongoConfig] = None,
    ) -> "QueryAssembler":
        """
        Builds the request descriptor from raw input and assembles a query for it.

        `subject` may be a model instance or a model class, which gets
        instantiated. Errors from decoding the input propagate unchanged.
        """
        if isinstance(subject, type):
            subject = subject()

        restful_api = RestfulApi.create(api_class, params, config)

        return cls(restful_api, subject)

    def validate(self, error_bag: Optional[ErrorBag] = None) -> ErrorBag:
        return self.restful_api.validate(error_bag)

    def get_restful_api(self) -> RestfulApi:
        return self.restful_api

    def get_model(self) -> Any:
        return self.subject

    def get_builder(self) -> QueryBuilder:
        if self._builder is None:
            self._builder = self.subject.query()
        return self._builder

    # ===== Component handlers =====

    def _handle_field_selector(self) -> None:
        selector = self.restful_api.field_selector()

        for field in selector.fields(ROOT_NAMESPACE):
            structure = selector.get_field_structure(f"{ROOT_NAMESPACE}.{field.name}")
            if structure is None:
                continue

            if structure.type == 'atomic':
                log.debug(f"select {color_palette['field'](field.name)}")
                self.get_builder().add_select(field.name)

    def _handle_resource_filter(self) -> None:
        for entry in self.restful_api.resource_filter().filtering():
            operator = parse_operator(entry.operator)
            log.debug(
                f"filter {color_palette['field'](entry.filtering)} "
                f"{color_palette['operator'](entry.operator)} {color_palette['value'](entry.value)}"
            )

            if isinstance(operator, Comparison):
                self.get_builder().where(entry.filtering, operator.operator, entry.value)
            else:
                FILTER_HANDLERS[operator](self.get_builder(), entry)

    def _handle_offset_paginator(self) -> None:
        paginate = self.restful_api.resource_offset_paginator().offset_paginate()

        if paginate.limit:
            log.debug(f"limit {color_palette['value'](paginate.limit)}")
            self.get_builder().limit(paginate.limit)

        if paginate.offset:
            log.debug(f"offset {color_palette['value'](paginate.offset)}")
            self.get_builder().offset(paginate.offset)

    def _handle_resource_sort(self) -> None:
        sort = self.restful_api.resource_sort().sort()

        if sort.sort_field:
            log.debug(f"order by {color_palette['field'](sort.sort_field)} {sort.direction}")
            self.get_builder().order_by(sort.sort_field, sort.direction)

    def _handle_resource_search(self) -> None:
        search = self.restful_api.resource_search().search()

        if search.search_condition:
            log.debug(
                f"search {color_palette['field'](search.search_condition)} "
                f"for {color_palette['value'](search.search_value)}"
            )
            self.get_builder().where(search.search_condition, 'like', f"%{search.search_value}%")
