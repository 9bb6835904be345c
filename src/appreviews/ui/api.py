"""HTTP API exposing app registration and recent reviews."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime  # noqa: TC003
from logging import getLogger
from typing import TYPE_CHECKING

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from appreviews.domain.errors import DomainValidationError, PersistenceError

if TYPE_CHECKING:
    from appreviews.app import ReviewServices
    from appreviews.domain.model import Review

log = getLogger(__name__)


class ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class AddAppRequest(ApiModel):
    app_id: str = Field(default="", alias="appId")


class AddAppResponse(ApiModel):
    app_id: str = Field(alias="appId")


class ReviewResponse(ApiModel):
    id: str
    content: str
    score: int
    author: str
    submitted_at: datetime = Field(alias="submittedAt")
    app_id: str = Field(alias="appId")

    @classmethod
    def from_domain(cls, review: Review) -> ReviewResponse:
        return cls(
            id=review.id,
            content=review.content,
            score=review.score,
            author=review.author,
            submittedAt=review.submitted_at,
            appId=review.app_id,
        )


class ReviewsResponse(ApiModel):
    reviews: list[ReviewResponse] = Field(default_factory=list[ReviewResponse])


def create_api(
    services: ReviewServices,
    *,
    run_scheduler: bool = True,
    cors_origins: tuple[str, ...] = ("*",),
) -> FastAPI:
    """Build the FastAPI application around already wired ``services``."""

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        if run_scheduler:
            services.scheduler.start()
        try:
            yield
        finally:
            await run_in_threadpool(services.scheduler.stop)

    api = FastAPI(title="appreviews", lifespan=lifespan)
    api.add_middleware(
        CORSMiddleware,
        allow_origins=list(cors_origins),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @api.exception_handler(RequestValidationError)
    async def _invalid_request(_request: Request, exc: RequestValidationError) -> JSONResponse:
        log.debug("Rejected request body: %s", exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Invalid request body"},
        )

    @api.post("/api/v1/app", status_code=status.HTTP_201_CREATED, response_model=AddAppResponse)
    def add_app(payload: AddAppRequest) -> AddAppResponse:
        if not payload.app_id.strip():
            raise HTTPException(status.HTTP_400_BAD_REQUEST, detail="appId is required")
        try:
            app = services.register_app(payload.app_id)
        except DomainValidationError as exc:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
        except PersistenceError as exc:
            log.exception("Failed to register app %s", payload.app_id)
            raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
        return AddAppResponse(appId=app.id)

    @api.get("/api/v1/app/{app_id}/reviews/recent", response_model=ReviewsResponse)
    def recent_reviews(app_id: str) -> ReviewsResponse:
        try:
            reviews = services.recent_reviews(app_id)
        except DomainValidationError as exc:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
        except PersistenceError as exc:
            log.exception("Failed to read reviews for app %s", app_id)
            raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
        return ReviewsResponse(reviews=[ReviewResponse.from_domain(review) for review in reviews])

    return api


__all__ = ["AddAppRequest", "ReviewResponse", "ReviewsResponse", "create_api"]
