"""MongoDB connection handling."""

from typing import Any, Dict, Optional

from pydantic import BaseModel
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from restmongo.core.logging import color_palette, log


class DbConfig(BaseModel):
    """Connection settings for a MongoDB deployment."""

    uri: str = "mongodb://localhost:27017"
    database: str
    timeout_ms: int = 5000
    app_name: Optional[str] = None

    def client_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {"serverSelectionTimeoutMS": self.timeout_ms}
        if self.app_name:
            kwargs["appname"] = self.app_name
        return kwargs


class DbClient:
    """Owns the MongoClient; pymongo only connects on first use."""

    def __init__(self, config: DbConfig, client: Optional[MongoClient] = None):
        self.config = config
        self._client = client

    @property
    def client(self) -> MongoClient:
        if self._client is None:
            self._client = MongoClient(self.config.uri, connect=False, **self.config.client_kwargs())
        return self._client

    def get_db(self) -> Database:
        return self.client[self.config.database]

    def get_collection(self, name: str) -> Collection:
        return self.get_db()[name]

    def test_connection(self) -> bool:
        """Pings the server; raises pymongo's error when it cannot be reached."""
        self.client.admin.command("ping")
        log.success(f"Connected to database {color_palette['collection'](self.config.database)}")
        return True

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
