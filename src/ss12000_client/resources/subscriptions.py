"""Webhook subscription management (POST/GET/PATCH/DELETE /subscriptions)."""

from __future__ import annotations

from datetime import datetime
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..outcome import Outcome
from ._collection import ListOnlyCollection


class ResourceTypeRef(BaseModel):
    resource: str

    model_config = ConfigDict(extra="forbid")


class SubscriptionCreate(BaseModel):
    name: str
    target: str
    resource_types: List[ResourceTypeRef] = Field(alias="resourceTypes")

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    @field_validator("resource_types", mode="before")
    @classmethod
    def _wrap_plain_names(cls, value: Any) -> Any:
        # Accept ["Person", "Activity"] as shorthand for [{"resource": ...}].
        if isinstance(value, (list, tuple)):
            return [{"resource": v} if isinstance(v, str) else v for v in value]
        return value


class SubscriptionUpdate(BaseModel):
    expires: datetime

    model_config = ConfigDict(extra="forbid")


class SubscriptionCollection(ListOnlyCollection):
    async def get(self, subscription_id: str) -> Outcome:
        return await self.client.get(
            self.item_path(subscription_id), resource=self.name
        )

    async def create(self, body: Any) -> Outcome:
        """body: SubscriptionCreate or a raw JSON mapping."""
        return await self.client.post(self.path, json_body=body, resource=self.name)

    async def update(self, subscription_id: str, body: Any) -> Outcome:
        """PATCH the subscription's expiry; body: SubscriptionUpdate or mapping."""
        return await self.client.patch(
            self.item_path(subscription_id), json_body=body, resource=self.name
        )

    async def delete(self, subscription_id: str) -> Outcome:
        return await self.client.delete(
            self.item_path(subscription_id), resource=self.name
        )


__all__ = [
    "ResourceTypeRef",
    "SubscriptionCreate",
    "SubscriptionUpdate",
    "SubscriptionCollection",
]
