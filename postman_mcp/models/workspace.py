"""
Pydantic models for Postman workspaces and collection listings.

These mirror the parts of the Postman API payloads we read; unknown fields
are kept so nothing the API sends is lost on the way through.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Workspace(BaseModel):
    """Workspace ownership metadata attached to tool results."""
    id: str
    name: str
    type: str = "personal"

    @field_validator("type", mode="before")
    @classmethod
    def default_type(cls, v: Optional[str]) -> str:
        return v or "personal"

    @classmethod
    def unknown(cls, workspace_id: str) -> "Workspace":
        """Placeholder used when a request-scoped lookup cannot resolve the workspace."""
        return cls(id=workspace_id, name="Unknown", type="unknown")


class WorkspaceCollectionRef(BaseModel):
    """A collection entry inside a workspace listing."""
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    uid: Optional[str] = None
    name: Optional[str] = None


class WorkspaceListing(BaseModel):
    """One entry of ``GET /workspaces``."""
    model_config = ConfigDict(extra="allow")

    id: str
    name: str = ""
    type: Optional[str] = None
    collections: List[WorkspaceCollectionRef] = Field(default_factory=list)

    @field_validator("collections", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return v or []

    def contains_collection(self, collection_id: str) -> bool:
        """
        Check whether this workspace holds the given collection.

        Two-stage predicate: an exact ``id`` match, or a composite ``uid``
        (``<owner>-<collection id>``) that starts with ``collection_id``.
        """
        if not collection_id:
            return False
        for ref in self.collections:
            if ref.id == collection_id:
                return True
            if ref.uid and ref.uid.startswith(collection_id):
                return True
        return False

    def to_workspace(self) -> Workspace:
        return Workspace(id=self.id, name=self.name, type=self.type)


class CollectionSummary(BaseModel):
    """One entry of ``GET /collections``."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Optional[str] = None
    uid: str = ""
    name: str = ""
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")
    workspace: Optional[str] = None

    @property
    def workspace_id(self) -> str:
        """Owning workspace id, falling back to the owner prefix of the uid."""
        return self.workspace or self.uid.split("-")[0]
