import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.core.exceptions import ConflictError, ValidationError
from school_admin.core.models import Subject

from .schemas import SubjectCreate, SubjectResponse

logger = logging.getLogger(__name__)


def _to_response(s: Subject) -> SubjectResponse:
    return SubjectResponse(id=s.id, subject_name=s.subject_name, created_at=s.created_at)


async def create_subject(db: AsyncSession, payload: SubjectCreate) -> SubjectResponse:
    name = payload.subject_name.strip()
    if not name:
        raise ValidationError("subject_name is required.")
    try:
        obj = Subject(subject_name=name)
        db.add(obj)
        await db.commit()
        await db.refresh(obj)
    except IntegrityError:
        await db.rollback()
        raise ConflictError("This subject already exists.")
    logger.info("Created subject %r (id=%s)", name, obj.id)
    return _to_response(obj)


async def list_subjects(db: AsyncSession) -> List[SubjectResponse]:
    result = await db.execute(select(Subject).order_by(Subject.subject_name))
    return [_to_response(s) for s in result.scalars().all()]
