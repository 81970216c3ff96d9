from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..domain import Event


class EventPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: str = Field(default="")
    datetime: str
    location: str = Field(default="")
    category: str
    priority: str
    completed: bool = Field(default=False)
    created_at: str = Field(alias="createdAt")

    @classmethod
    def from_domain(cls, event: Event) -> "EventPayload":
        return cls.model_validate(event.to_record())


class EventWrite(BaseModel):
    """Body accepted by create and update; required fields are checked per operation."""

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    description: Optional[str] = None
    datetime: Optional[str] = None
    location: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[str] = None
    completed: Optional[bool] = None

    def fields(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class EventEnvelope(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: EventPayload

    def render(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class EventListEnvelope(BaseModel):
    success: bool = True
    data: List[EventPayload]
    pagination: Optional[Pagination] = None

    def render(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ErrorEnvelope(BaseModel):
    success: bool = False
    error: str
    message: str
