"""Decoded request data handed out by the request components."""

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict

FieldType = Literal["atomic", "object", "collection"]
SortDirection = Literal["asc", "desc"]


class FieldObject(BaseModel):
    """A field named in the `fields` parameter, with any sub-fields it selected."""

    model_config = ConfigDict(frozen=True)

    name: str
    sub_fields: List["FieldObject"] = []


class FieldStructure(BaseModel):
    """Declared shape of a field at a namespace path such as `$.address.city`."""

    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str
    type: FieldType
    children: List[str] = []

    @property
    def path(self) -> str:
        return f"{self.namespace}.{self.name}"


class FilterEntry(BaseModel):
    """One `field:operator = value` constraint from the `filtering` parameter."""

    model_config = ConfigDict(frozen=True)

    filtering: str
    operator: str
    value: Any = None


class OffsetPaginate(BaseModel):
    limit: Optional[int] = None
    offset: Optional[int] = None


class Sort(BaseModel):
    sort_field: Optional[str] = None
    direction: SortDirection = "asc"


class Search(BaseModel):
    search_condition: Optional[str] = None
    search_value: Optional[str] = None
