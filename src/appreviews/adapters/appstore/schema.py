"""Pydantic models describing the App Store customer-review feed payloads."""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

from pydantic import BaseModel, ConfigDict, Field, field_validator

RawEntry = Mapping[str, object]


class AppStoreBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class LabelPayload(AppStoreBaseModel):
    label: str = ""

    @field_validator("label", mode="before")
    @classmethod
    def _stringify(cls, value: object) -> object:
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value


class AuthorPayload(AppStoreBaseModel):
    name: LabelPayload = Field(default_factory=LabelPayload)


class EntryPayload(AppStoreBaseModel):
    """One feed entry; every field defaults so partial entries validate."""

    id: LabelPayload = Field(default_factory=LabelPayload)
    author: AuthorPayload = Field(default_factory=AuthorPayload)
    content: LabelPayload = Field(default_factory=LabelPayload)
    rating: LabelPayload = Field(default_factory=LabelPayload, alias="im:rating")
    updated: LabelPayload = Field(default_factory=LabelPayload)


class FeedPayload(AppStoreBaseModel):
    entry: list[RawEntry] = Field(default_factory=list[RawEntry])

    @field_validator("entry", mode="before")
    @classmethod
    def _normalize_entries(cls, value: object) -> object:
        # The feed collapses a single entry into a bare object and omits empty lists.
        if value is None:
            return []
        if isinstance(value, Mapping):
            return [cast(RawEntry, value)]
        if isinstance(value, list):
            return [item for item in cast(list[object], value) if isinstance(item, Mapping)]
        return value


class FeedResponse(AppStoreBaseModel):
    feed: FeedPayload = Field(default_factory=FeedPayload)

    @field_validator("feed", mode="before")
    @classmethod
    def _empty_feed(cls, value: object) -> object:
        return {} if value is None else value


__all__ = [
    "AuthorPayload",
    "EntryPayload",
    "FeedPayload",
    "FeedResponse",
    "LabelPayload",
    "RawEntry",
]
