"""On-disk record shapes for the JSON store."""

from __future__ import annotations

from pydantic import AwareDatetime, BaseModel, ConfigDict, TypeAdapter

from appreviews.domain.model import Review, TrackedApp


class JsonStoreModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class ReviewRecord(JsonStoreModel):
    id: str
    app_id: str
    author: str
    content: str
    score: int
    submitted_at: AwareDatetime
    retrieved_at: AwareDatetime

    @classmethod
    def from_domain(cls, review: Review) -> ReviewRecord:
        return cls(
            id=review.id,
            app_id=review.app_id,
            author=review.author,
            content=review.content,
            score=review.score,
            submitted_at=review.submitted_at,
            retrieved_at=review.retrieved_at,
        )

    def to_domain(self) -> Review:
        return Review(
            id=self.id,
            app_id=self.app_id,
            author=self.author,
            content=self.content,
            score=self.score,
            submitted_at=self.submitted_at,
            retrieved_at=self.retrieved_at,
        )


class AppRecord(JsonStoreModel):
    id: str

    @classmethod
    def from_domain(cls, app: TrackedApp) -> AppRecord:
        return cls(id=app.id)


REVIEW_RECORDS = TypeAdapter(list[ReviewRecord])
APP_RECORDS = TypeAdapter(list[AppRecord])

__all__ = ["APP_RECORDS", "REVIEW_RECORDS", "AppRecord", "ReviewRecord"]
