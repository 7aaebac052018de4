"""Pydantic v2 response models for the GotoPhoto API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Error
# ---------------------------------------------------------------------------


class ErrorDetail(BaseModel):
    code: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    error: ErrorDetail


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    backend: str | None = None
    uptime_seconds: float = 0.0


# ---------------------------------------------------------------------------
# Locations
# ---------------------------------------------------------------------------


class LocationOut(BaseModel):
    id: int
    title: str | None = None


class PhotolocationOut(BaseModel):
    id: int
    location: int | None = None
    title: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    image_url: str | None = None
    description: str | None = None
