from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.core.exceptions import ServiceError
from school_admin.core.schemas import MAX_ID
from school_admin.db.session import get_db

from .schemas import PeriodCreate, PeriodResponse
from . import service

router = APIRouter(prefix="/api/v1/periods", tags=["periods"])


@router.post("", response_model=PeriodResponse, status_code=status.HTTP_201_CREATED)
async def create_period(
    payload: PeriodCreate,
    db: AsyncSession = Depends(get_db),
) -> PeriodResponse:
    try:
        return await service.create_period(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("", response_model=List[PeriodResponse])
async def list_periods(db: AsyncSession = Depends(get_db)) -> List[PeriodResponse]:
    return await service.list_periods(db)


@router.delete("/{period_id}", response_model=PeriodResponse)
async def delete_period(
    period_id: int = Path(..., ge=1, le=MAX_ID),
    db: AsyncSession = Depends(get_db),
) -> PeriodResponse:
    try:
        return await service.delete_period(db, period_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
