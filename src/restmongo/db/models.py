"""Collection-backed models: the subjects queries are assembled for."""

from typing import ClassVar, Optional

from pymongo.collection import Collection

from restmongo.core.errors import RestMongoError
from restmongo.core.query.builder import MongoQueryBuilder
from restmongo.db.client import DbClient


class MongoModel:
    """
    A handle on one MongoDB collection.

    Subclasses name their collection and share a client bound with `bind()`:

        class Order(MongoModel):
            collection_name = "orders"

        MongoModel.bind(DbClient(DbConfig(database="shop")))
        Order().query().where("status", "eq", "paid").get()

    An instance may instead wrap an explicit pymongo collection.
    """

    collection_name: ClassVar[str] = ""
    db_client: ClassVar[Optional[DbClient]] = None

    def __init__(self, collection: Optional[Collection] = None):
        self._collection = collection

    @classmethod
    def bind(cls, client: DbClient) -> None:
        cls.db_client = client

    def get_collection(self) -> Collection:
        if self._collection is not None:
            return self._collection
        if not self.collection_name:
            raise RestMongoError(f"{type(self).__name__} does not define a collection_name")
        if self.db_client is None:
            raise RestMongoError(f"{type(self).__name__} is not bound to a DbClient")
        return self.db_client.get_collection(self.collection_name)

    def query(self) -> MongoQueryBuilder:
        return MongoQueryBuilder(self.get_collection())
