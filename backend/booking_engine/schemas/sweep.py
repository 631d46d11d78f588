"""Schemas for the scheduler-triggered sweep endpoints."""

import uuid
from datetime import date, datetime

from pydantic import BaseModel


class ExpirationSweepRequest(BaseModel):
    """``now`` defaults to the server clock (naive UTC)."""

    now: datetime | None = None


class CompletionSweepRequest(BaseModel):
    today: date | None = None


class SweepResponse(BaseModel):
    """Ids transitioned by this run; empty when nothing was due."""

    booking_ids: list[uuid.UUID]
    count: int
