# examples/main.py
"""
restmongo: serve a MongoDB collection as a queryable REST resource.

Run with `uvicorn examples.main:app` and try
    /orders?fields=id,status&filtering[status:in]=paid,shipped&sort=created_at&direction=desc&limit=10
"""

from fastapi import APIRouter, FastAPI

from restmongo import DbClient, DbConfig, MongoModel, ResourceApi, RestMongoConfig, log
from restmongo.api import ResourceRouter
from restmongo.core.logging import color_palette


class Order(MongoModel):
    collection_name = "orders"


class OrderApi(ResourceApi):
    field_structure = {
        "id": "atomic",
        "status": "atomic",
        "total": "atomic",
        "created_at": "atomic",
        "customer": {"name": "atomic", "email": "atomic"},
    }
    filters = {
        "status": ["eq", "ne", "in", "not_in"],
        "total": ["gt", "gte", "lt", "lte", "between", "not_between"],
        "customer.name": ["eq", "contains"],
    }
    filter_types = {"total": float}
    max_limit = 100
    sort_fields = ["created_at", "total"]
    default_sort = "created_at"
    default_direction = "desc"
    search_condition = "customer.name"


config = RestMongoConfig(project_name="Orders API", default_limit=20)
db_client = DbClient(DbConfig(database="shop", app_name=config.project_name))

log.section(f"Starting {config.project_name}")
with log.timed("Route generation"):
    MongoModel.bind(db_client)
    log.info(f"Serving collection {color_palette['collection'](Order.collection_name)}")

    router = APIRouter()
    with log.indented():
        ResourceRouter(Order, OrderApi, router, config=config).generate_routes()

app = FastAPI(title=config.project_name, version=config.version)
app.include_router(router)
