"""
Read-only projections of a collection tree returned to MCP clients.
"""

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .collection import KeyValue, RequestBody, RequestItem


class SearchResult(BaseModel):
    """A folder or request whose name matched a search query."""
    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["folder", "request"] = Field(..., alias="type")
    id: Optional[str] = None
    name: str
    method: Optional[str] = None
    path: str


class RequestSummary(BaseModel):
    id: Optional[str] = None
    name: str
    method: Optional[str] = None
    path: str


class FolderSummary(BaseModel):
    id: Optional[str] = None
    name: str
    path: str
    folders: List["FolderSummary"] = Field(default_factory=list)
    requests: List[RequestSummary] = Field(default_factory=list)


class CollectionStructure(BaseModel):
    """Lossy outline of a collection: folders and requests only."""
    folders: List[FolderSummary] = Field(default_factory=list)
    requests: List[RequestSummary] = Field(default_factory=list)


FolderSummary.model_rebuild()


class RequestDocumentation(BaseModel):
    """Full description of a single request, including sample responses."""
    id: Optional[str] = None
    name: str
    method: Optional[str] = None
    url: str = ""
    description: str = ""
    headers: List[KeyValue] = Field(default_factory=list)
    body: Optional[RequestBody] = None
    responses: List[Any] = Field(default_factory=list)

    @classmethod
    def from_item(cls, item: RequestItem) -> "RequestDocumentation":
        return cls(
            id=item.id,
            name=item.name,
            method=item.method,
            url=item.url.raw,
            description=item.description,
            headers=item.headers,
            body=item.body,
            responses=item.responses,
        )
