import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.core.exceptions import ConflictError, NotFoundError, ValidationError
from school_admin.core.models import SchoolClass, Timetable

from .schemas import ClassCreate, ClassResponse, ClassUpdate

logger = logging.getLogger(__name__)


def _class_to_response(c: SchoolClass) -> ClassResponse:
    return ClassResponse(
        id=c.id,
        standard=c.standard,
        division=c.division,
        created_at=c.created_at,
        updated_at=c.updated_at,
    )


async def create_class(db: AsyncSession, payload: ClassCreate) -> ClassResponse:
    standard = payload.standard.strip()
    division = payload.division.strip()
    if not standard or not division:
        raise ValidationError("Standard and division are required.")
    try:
        obj = SchoolClass(standard=standard, division=division)
        db.add(obj)
        await db.commit()
        await db.refresh(obj)
    except IntegrityError:
        await db.rollback()
        raise ConflictError(f"Class {standard}-{division} already exists.")
    logger.info("Created class %s-%s (id=%s)", standard, division, obj.id)
    return _class_to_response(obj)


async def list_classes(db: AsyncSession) -> List[ClassResponse]:
    result = await db.execute(select(SchoolClass).order_by(SchoolClass.standard, SchoolClass.division))
    return [_class_to_response(c) for c in result.scalars().all()]


async def update_class(db: AsyncSession, class_id: int, payload: ClassUpdate) -> ClassResponse:
    changes = payload.model_dump(exclude_none=True)
    if not changes:
        raise ValidationError("No fields provided for update.")
    obj = await db.get(SchoolClass, class_id)
    if not obj:
        raise NotFoundError("Class not found.")
    for field, value in changes.items():
        if not value.strip():
            raise ValidationError(f"{field} cannot be blank.")
        setattr(obj, field, value.strip())
    try:
        await db.commit()
        await db.refresh(obj)
    except IntegrityError:
        await db.rollback()
        raise ConflictError("Update failed. This class combination already exists.")
    return _class_to_response(obj)


async def delete_class(db: AsyncSession, class_id: int) -> None:
    obj = await db.get(SchoolClass, class_id)
    if not obj:
        raise NotFoundError("Class not found.")
    used = await db.execute(select(Timetable.id).where(Timetable.class_id == class_id).limit(1))
    if used.scalar_one_or_none() is not None:
        raise ValidationError("Cannot delete this class. It has timetable entries assigned to it.")
    await db.delete(obj)
    await db.commit()
    logger.info("Deleted class id=%s", class_id)
