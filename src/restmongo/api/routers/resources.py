# src/restmongo/api/routers/resources.py
from typing import Any, Dict, List, Optional, Type, Union

from bson import ObjectId
from fastapi import APIRouter, HTTPException, Request
from fastapi.datastructures import QueryParams

from ...core.config import ParamNames, RestMongoConfig
from ...core.errors import RestfulApiError
from ...core.logging import color_palette, log
from ...core.query.assembler import QueryAssembler
from ...core.request.api import ResourceApi
from ...db.models import MongoModel


def collect_params(query_params: QueryParams, names: ParamNames) -> Dict[str, Any]:
    """
    Turns a query string into the raw input a RestfulApi expects.

    `filtering[field:op]=value` keys are gathered into the filtering mapping;
    a key repeated in the query string yields a list of its values.
    """
    params: Dict[str, Any] = {}
    filtering: Dict[str, Any] = {}
    prefix = f"{names.filtering}["

    for key in query_params.keys():
        values = query_params.getlist(key)
        value: Any = values if len(values) > 1 else values[0]

        if key.startswith(prefix) and key.endswith("]"):
            filtering[key[len(prefix):-1]] = value
        else:
            params[key] = value

    if filtering:
        params[names.filtering] = filtering
    return params


def serialize_document(value: Any) -> Any:
    """Renders ObjectIds as strings, recursing into embedded documents and arrays."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {key: serialize_document(item) for key, item in value.items()}
    if isinstance(value, list):
        return [serialize_document(item) for item in value]
    return value


class ResourceRouter:
    """Generates a list route that answers requests through a QueryAssembler."""

    def __init__(
        self,
        model: Union[MongoModel, Type[MongoModel]],
        api_class: Type[ResourceApi],
        router: APIRouter,
        config: Optional[RestMongoConfig] = None,
        path: Optional[str] = None,
    ):
        self.model = model
        self.api_class = api_class
        self.router = router
        self.config = config or RestMongoConfig()
        if config is not None:
            config.configure_logging()
        self.name = path or model.collection_name
        if not self.name:
            raise ValueError(f"{api_class.__name__} route needs a path or a model collection_name")

    def generate_routes(self) -> None:
        self._add_list_route()
        log.success(
            f"Generated LIST route for {color_palette['collection'](self.name)} "
            f"{color_palette['dim'](f'({self.api_class.__name__})')}"
        )

    def _add_list_route(self) -> None:
        @self.router.get(
            f"/{self.name}",
            response_model=List[Dict[str, Any]],
            summary=f"Get {self.name} resources",
            description=f"Retrieve {self.name} documents with field selection, filtering, sorting, search and pagination",
        )
        def list_resources(request: Request) -> List[Dict[str, Any]]:
            params = collect_params(request.query_params, self.config.params)
            self._apply_default_limit(params)

            try:
                assembler = QueryAssembler.create(self.model, self.api_class, params, self.config)
            except RestfulApiError as e:
                raise HTTPException(status_code=400, detail=f"Invalid request: {e.message}")

            error_bag = assembler.validate()
            if error_bag.fails():
                raise HTTPException(status_code=422, detail={"errors": error_bag.errors})

            documents = assembler.get_builder().get()
            return [serialize_document(document) for document in documents]

    def _apply_default_limit(self, params: Dict[str, Any]) -> None:
        limit_param = self.config.params.limit
        if (
            self.config.default_limit
            and self.api_class.max_limit is not None
            and limit_param not in params
        ):
            params[limit_param] = self.config.default_limit
