from pydantic import BaseModel, Field
from typing import Any, Generic, Optional, TypeVar

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel

# Shared properties
T = TypeVar("T")


class UserToken(BaseModel):
    user_id: str = Field(alias="id")
    exp: Optional[int] = None

    model_config = {"populate_by_name": True}


class CommonQueryParams(EmptyStringModel):
    search: Optional[str] = None
    page: int = 1
    limit: int = 10
    sort: str = "-createdAt"


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class JsonOutResult(BaseModel, Generic[T]):
    data: Optional[T] = None
    status: str
    status_code: str
    message: str


def dump(data: Any):
    """Turn pydantic models (or lists of them) into JSON-ready values."""
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, list):
        return [dump(d) for d in data]
    if isinstance(data, dict):
        return {k: dump(v) for k, v in data.items()}
    return data
