from typing import Any, Dict, List, Type, TypeVar

from fastapi import APIRouter, Depends, HTTPException, Path, Request, Response, status
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.core.exceptions import ServiceError, describe_validation_errors
from school_admin.core.schemas import MAX_ID
from school_admin.db.session import get_db

from .schemas import (
    TimetableEntryResponse,
    TimetableFormData,
    TimetableRow,
    TimetableSlotCreate,
    TimetableSlotUpdate,
)
from . import service

router = APIRouter(prefix="/api/v1/timetable", tags=["timetable"])

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

PayloadT = TypeVar("PayloadT", bound=BaseModel)


async def _read_body(request: Request) -> Dict[str, Any]:
    """Accept either a form post (the admin UI) or a JSON object."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return dict(form)
    if not await request.body():
        return {}
    try:
        data = await request.json()
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Malformed JSON body.")
    if not isinstance(data, dict):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Request body must be an object.")
    return data


def _parse(model: Type[PayloadT], data: Dict[str, Any]) -> PayloadT:
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=describe_validation_errors(e.errors()))


async def slot_create_payload(request: Request) -> TimetableSlotCreate:
    return _parse(TimetableSlotCreate, await _read_body(request))


async def slot_update_payload(request: Request) -> TimetableSlotUpdate:
    return _parse(TimetableSlotUpdate, await _read_body(request))


@router.get("", response_model=List[TimetableRow])
async def list_timetable(db: AsyncSession = Depends(get_db)) -> List[TimetableRow]:
    return await service.list_timetable(db)


@router.post(
    "",
    response_model=TimetableEntryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={200: {"description": "Existing entry for the period and class was updated"}},
)
async def upsert_timetable_slot(
    response: Response,
    payload: TimetableSlotCreate = Depends(slot_create_payload),
    db: AsyncSession = Depends(get_db),
) -> TimetableEntryResponse:
    try:
        entry, created = await service.upsert_timetable_slot(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    if not created:
        response.status_code = status.HTTP_200_OK
    return entry


@router.get("/form-data", response_model=TimetableFormData)
async def get_form_data(db: AsyncSession = Depends(get_db)) -> TimetableFormData:
    """Periods, classes, subjects and faculty for the assignment form dropdowns."""
    return await service.get_form_data(db)


@router.get("/class/{class_id}", response_model=List[TimetableRow])
async def get_class_timetable(
    class_id: int = Path(..., ge=1, le=MAX_ID),
    db: AsyncSession = Depends(get_db),
) -> List[TimetableRow]:
    return await service.list_class_timetable(db, class_id)


@router.get("/faculty/{faculty_id}", response_model=List[TimetableRow])
async def get_faculty_timetable(
    faculty_id: int = Path(..., ge=1, le=MAX_ID),
    db: AsyncSession = Depends(get_db),
) -> List[TimetableRow]:
    return await service.list_faculty_timetable(db, faculty_id)


@router.get("/{slot_id}", response_model=TimetableEntryResponse)
async def get_timetable_slot(
    slot_id: int = Path(..., ge=1, le=MAX_ID),
    db: AsyncSession = Depends(get_db),
) -> TimetableEntryResponse:
    try:
        return await service.get_timetable_slot(db, slot_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.patch("/{slot_id}", response_model=TimetableEntryResponse)
async def update_timetable_slot(
    slot_id: int = Path(..., ge=1, le=MAX_ID),
    payload: TimetableSlotUpdate = Depends(slot_update_payload),
    db: AsyncSession = Depends(get_db),
) -> TimetableEntryResponse:
    try:
        return await service.update_timetable_slot(db, slot_id, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{slot_id}", response_model=TimetableEntryResponse)
async def delete_timetable_slot(
    slot_id: int = Path(..., ge=1, le=MAX_ID),
    db: AsyncSession = Depends(get_db),
) -> TimetableEntryResponse:
    """Remove one entry and return it."""
    try:
        return await service.delete_timetable_slot(db, slot_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
