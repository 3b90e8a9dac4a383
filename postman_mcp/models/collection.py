"""
Pydantic models for Postman collection trees.

A collection is parsed into a rooted tree of ``Folder`` nodes (ordered
children) and ``RequestItem`` leaves. Missing leaf fields become empty
values instead of validation failures; the only hard requirement is a
list-valued top-level ``item`` field.
"""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.exceptions import MalformedCollectionError


def _as_text(v: Any) -> str:
    return "" if v is None else str(v)


def _as_optional_text(v: Any) -> Optional[str]:
    return None if v is None else str(v)


class KeyValue(BaseModel):
    """A header, urlencoded field or form-data field."""
    model_config = ConfigDict(extra="allow")

    key: str = ""
    value: Any = ""

    @field_validator("key", mode="before")
    @classmethod
    def coerce_key(cls, v: Any) -> str:
        return _as_text(v)


class RequestBody(BaseModel):
    """Request body; only ``raw`` and ``urlencoded`` are interpreted by code generation."""
    model_config = ConfigDict(extra="allow")

    mode: Optional[str] = None
    raw: Optional[str] = None
    urlencoded: Optional[List[KeyValue]] = None
    formdata: Optional[List[KeyValue]] = None

    @field_validator("mode", "raw", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> Optional[str]:
        return _as_optional_text(v)

    @field_validator("urlencoded", "formdata", mode="before")
    @classmethod
    def keep_field_objects(cls, v: Any) -> Optional[List[Any]]:
        """Entries that are not objects are dropped."""
        if not isinstance(v, list):
            return None
        return [field for field in v if isinstance(field, dict)]


class RequestUrl(BaseModel):
    """Structured URL as exposed by the Postman API."""
    model_config = ConfigDict(extra="allow")

    raw: str = ""
    host: List[str] = Field(default_factory=list)
    path: List[str] = Field(default_factory=list)

    @field_validator("raw", mode="before")
    @classmethod
    def coerce_raw(cls, v: Any) -> str:
        return _as_text(v)

    @field_validator("host", "path", mode="before")
    @classmethod
    def coerce_segments(cls, v: Any) -> List[str]:
        """Accept a single string or segment objects ({"value": ...})."""
        if v is None:
            return []
        if not isinstance(v, list):
            return [str(v)]
        segments = []
        for segment in v:
            if isinstance(segment, dict):
                segment = segment.get("value")
            segments.append(_as_text(segment))
        return segments


class Folder(BaseModel):
    """Container node: a named group with ordered children."""
    kind: Literal["folder"] = "folder"
    id: Optional[str] = None
    name: str = ""
    description: Optional[str] = None
    children: List["CollectionNode"] = Field(default_factory=list)


class RequestItem(BaseModel):
    """Leaf node: one HTTP request definition plus recorded sample responses."""
    kind: Literal["request"] = "request"
    id: Optional[str] = None
    name: str = ""
    method: Optional[str] = None
    url: RequestUrl = Field(default_factory=RequestUrl)
    description: str = ""
    headers: List[KeyValue] = Field(default_factory=list)
    body: Optional[RequestBody] = None
    responses: List[Any] = Field(default_factory=list)


CollectionNode = Union[Folder, RequestItem]

Folder.model_rebuild()


def _optional_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _text(value: Any) -> str:
    # descriptions may be {"content": ..., "type": "text/markdown"}
    if isinstance(value, dict):
        value = value.get("content")
    return "" if value is None else str(value)


def _item_id(raw: Dict[str, Any]) -> Optional[str]:
    return _optional_str(raw.get("id")) or _optional_str(raw.get("_postman_id"))


def _parse_url(raw_url: Any) -> RequestUrl:
    if isinstance(raw_url, str):
        return RequestUrl(raw=raw_url)
    if isinstance(raw_url, dict):
        return RequestUrl.model_validate(raw_url)
    return RequestUrl()


def _parse_request(raw: Dict[str, Any]) -> RequestItem:
    request = raw.get("request")
    if isinstance(request, str):
        request = {"url": request}
    elif not isinstance(request, dict):
        request = {}

    headers = request.get("header")
    if not isinstance(headers, list):
        headers = []

    body = request.get("body")
    responses = raw.get("response")

    return RequestItem(
        id=_item_id(raw),
        name=_text(raw.get("name")),
        method=_optional_str(request.get("method")),
        url=_parse_url(request.get("url")),
        description=_text(request.get("description")),
        headers=[KeyValue.model_validate(h) for h in headers if isinstance(h, dict)],
        body=RequestBody.model_validate(body) if isinstance(body, dict) else None,
        responses=responses if isinstance(responses, list) else [],
    )


def parse_collection(document: Any) -> Folder:
    """
    Parse a Postman collection document into its root folder.

    Accepts either the bare collection (``{"info": ..., "item": [...]}``) or
    the API envelope (``{"collection": {...}}``). The root takes its name from
    ``info.name`` and its id from ``info._postman_id``.

    Raises:
        MalformedCollectionError: If the top-level ``item`` field is absent
            or not a list.
    """
    data = document
    if isinstance(data, dict) and "item" not in data and isinstance(data.get("collection"), dict):
        data = data["collection"]

    if not isinstance(data, dict) or not isinstance(data.get("item"), list):
        raise MalformedCollectionError()

    info = data.get("info") if isinstance(data.get("info"), dict) else {}
    root = Folder(
        id=_optional_str(info.get("_postman_id")),
        name=_text(info.get("name")),
        description=_text(info.get("description")) or None,
    )

    # explicit stack, collections can nest arbitrarily deep
    pending = [(root, data["item"])]
    while pending:
        folder, raw_items = pending.pop()
        for raw in raw_items:
            if not isinstance(raw, dict):
                continue
            if isinstance(raw.get("item"), list):
                child = Folder(
                    id=_item_id(raw),
                    name=_text(raw.get("name")),
                    description=_text(raw.get("description")) or None,
                )
                pending.append((child, raw["item"]))
            else:
                child = _parse_request(raw)
            folder.children.append(child)

    return root
