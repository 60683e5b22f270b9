"""Service liveness endpoint."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from users_backend.api.models import HealthResponse
from users_backend.database import DatabaseService, get_database

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health(
    database: Annotated[DatabaseService, Depends(get_database)],
) -> HealthResponse | JSONResponse:
    """Report whether the database is reachable."""

    if await database.health_check():
        return HealthResponse(status="ok")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "unavailable"},
    )
