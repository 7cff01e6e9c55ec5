"""Database components: connection handling and collection models."""

from restmongo.db.client import DbClient, DbConfig
from restmongo.db.models import MongoModel

__all__ = [
    "DbClient",
    "DbConfig",
    "MongoModel",
]
