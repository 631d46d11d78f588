"""Admin API router: sweeps triggered by an external scheduler (cron)."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from booking_engine.api.deps import get_db, require_admin
from booking_engine.database import to_naive_utc, utcnow
from booking_engine.schemas.sweep import CompletionSweepRequest, ExpirationSweepRequest, SweepResponse
from booking_engine.services.expiration_service import run_completion_sweep, run_expiration_sweep

router = APIRouter(
    prefix="/api/v1/admin/sweeps",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.post("/expire", response_model=SweepResponse, summary="Expire unpaid bookings")
async def expire_unpaid_bookings(
    body: ExpirationSweepRequest | None = None,
    db: AsyncSession = Depends(get_db),
) -> dict:
    now = to_naive_utc(body.now) if body and body.now else utcnow()
    expired = await run_expiration_sweep(db, now)
    return {"booking_ids": expired, "count": len(expired)}


@router.post("/complete", response_model=SweepResponse, summary="Complete finished stays")
async def complete_finished_stays(
    body: CompletionSweepRequest | None = None,
    db: AsyncSession = Depends(get_db),
) -> dict:
    today = (body.today if body else None) or utcnow().date()
    completed = await run_completion_sweep(db, today)
    return {"booking_ids": completed, "count": len(completed)}
