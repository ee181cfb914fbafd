from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.core.exceptions import ServiceError
from school_admin.db.session import get_db

from .schemas import FacultyCreate, FacultyResponse
from . import service

router = APIRouter(prefix="/api/v1/faculty", tags=["faculty"])


@router.post("", response_model=FacultyResponse, status_code=status.HTTP_201_CREATED)
async def create_faculty(
    payload: FacultyCreate,
    db: AsyncSession = Depends(get_db),
) -> FacultyResponse:
    try:
        return await service.create_faculty(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("", response_model=List[FacultyResponse])
async def list_faculty(db: AsyncSession = Depends(get_db)) -> List[FacultyResponse]:
    return await service.list_faculty(db)
