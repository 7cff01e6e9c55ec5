"""
restmongo: translate declarative REST resource requests into MongoDB queries.
"""

from restmongo.core.query.assembler import QueryAssembler
from restmongo.core import RestMongoConfig, RestfulApiError, log
from restmongo.core.query import MongoQueryBuilder, QueryBuilder
from restmongo.core.request import ErrorBag, ResourceApi, RestfulApi
from restmongo.db import DbClient, DbConfig, MongoModel

__version__ = "0.1.0"

__all__ = [
    "DbClient",
    "DbConfig",
    "ErrorBag",
    "MongoModel",
    "MongoQueryBuilder",
    "QueryAssembler",
    "QueryBuilder",
    "ResourceApi",
    "RestMongoConfig",
    "RestfulApi",
    "RestfulApiError",
    "log",
]
