from __future__ import annotations

from fastapi import APIRouter, Request

from ..schemas import HealthResponse

router = APIRouter(prefix="", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health(request: Request):
    coordinator = request.app.state.coordinator
    return HealthResponse(status="ok", rooms=len(coordinator.registry))
