"""Pydantic models for trip listing."""

from pydantic import BaseModel, Field

from core.models.trip import TripView


class ListTripsResponse(BaseModel):
    """Response model for the trip listing, newest first."""

    trips: list[TripView] = Field(default_factory=list)
