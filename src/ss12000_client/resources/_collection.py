"""
Resource facades: thin, stateless wrappers that assemble filters for one
SS12000 resource family and forward them to the client.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field

from ..outcome import Outcome
from ..query import quote_component
from .filters import ListFilters

if TYPE_CHECKING:
    from ..client import SS12000Client

FiltersArg = Union[ListFilters, Mapping[str, Any], None]


class LookupRequest(BaseModel):
    """Body of a POST /{collection}/lookup call."""

    ids: Optional[List[str]] = None
    civic_nos: Optional[List[str]] = Field(default=None, alias="civicNos")

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class ListOnlyCollection:
    """A family exposing only GET /{collection}."""

    def __init__(
        self,
        client: "SS12000Client",
        path: str,
        filters_model: Type[ListFilters] = ListFilters,
    ):
        self.client = client
        self.path = "/" + path.strip("/")
        self.name = self.path.lstrip("/")
        self.filters_model = filters_model

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r})"

    def build_filters(self, filters: FiltersArg = None, **kwargs: Any) -> Dict[str, Any]:
        """
        Accepts a filter model, a mapping (wire keys or field names), or keyword
        filters; returns the ordered wire mapping.
        """
        if filters is not None and kwargs:
            raise TypeError("Pass either a filters object or keyword filters, not both.")
        if isinstance(filters, ListFilters):
            return filters.to_filters()
        data = dict(filters) if filters is not None else kwargs
        return self.filters_model.model_validate(data).to_filters()

    def item_path(self, item_id: str) -> str:
        item_id = str(item_id).strip()
        if not item_id:
            raise ValueError(f"{self.name}: id must be provided.")
        return f"{self.path}/{quote_component(item_id)}"

    async def list(self, filters: FiltersArg = None, **kwargs: Any) -> Outcome:
        """Fetch one page. Pass the response's pageToken back in for the next."""
        params = self.build_filters(filters, **kwargs)
        return await self.client.get(self.path, params=params, resource=self.name)


class ResourceCollection(ListOnlyCollection):
    """A family with list, lookup (POST) and get-by-id endpoints."""

    def __init__(
        self,
        client: "SS12000Client",
        path: str,
        filters_model: Type[ListFilters] = ListFilters,
        *,
        expandable: bool = True,
        lookup_expandable: Optional[bool] = None,
    ):
        super().__init__(client, path, filters_model)
        self.expandable = expandable
        # Some families expand on get but not on lookup (programmes).
        self.lookup_expandable = (
            expandable if lookup_expandable is None else lookup_expandable
        )

    def _expand_params(
        self,
        expand: Optional[Iterable[str]],
        expand_reference_names: bool,
        *,
        allowed: bool,
        operation: str,
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {}
        if expand is not None:
            if not allowed:
                raise TypeError(f"{self.name} {operation} does not support expand.")
            params["expand"] = list(expand)
        if expand_reference_names:
            params["expandReferenceNames"] = True
        return params

    async def lookup(
        self,
        body: Any,
        *,
        expand: Optional[Iterable[str]] = None,
        expand_reference_names: bool = False,
    ) -> Outcome:
        """
        POST /{collection}/lookup.

        body may be a LookupRequest, a list of ids, or any JSON tree.
        """
        if isinstance(body, (list, tuple)):
            body = LookupRequest(ids=list(body))
        return await self.client.post(
            f"{self.path}/lookup",
            json_body=body,
            params=self._expand_params(
                expand,
                expand_reference_names,
                allowed=self.lookup_expandable,
                operation="lookup",
            ),
            resource=self.name,
        )

    async def get(
        self,
        item_id: str,
        *,
        expand: Optional[Iterable[str]] = None,
        expand_reference_names: bool = False,
    ) -> Outcome:
        return await self.client.get(
            self.item_path(item_id),
            params=self._expand_params(
                expand, expand_reference_names, allowed=self.expandable, operation="get"
            ),
            resource=self.name,
        )


class DeletableResourceCollection(ResourceCollection):
    async def delete(self, item_id: str) -> Outcome:
        return await self.client.delete(self.item_path(item_id), resource=self.name)


__all__ = [
    "LookupRequest",
    "ListOnlyCollection",
    "ResourceCollection",
    "DeletableResourceCollection",
]
