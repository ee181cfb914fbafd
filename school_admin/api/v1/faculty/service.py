import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.core.exceptions import ConflictError
from school_admin.core.models import Faculty
from school_admin.core.security import hash_password

from .schemas import FacultyCreate, FacultyResponse

logger = logging.getLogger(__name__)


def _to_response(f: Faculty) -> FacultyResponse:
    return FacultyResponse(
        id=f.id,
        f_name=f.f_name,
        l_name=f.l_name,
        email=f.email,
        phone=f.phone,
        address=f.address,
        role=f.role,
        has_password=f.password_hash is not None,
        created_at=f.created_at,
    )


async def create_faculty(db: AsyncSession, payload: FacultyCreate) -> FacultyResponse:
    email = payload.email.lower()
    try:
        obj = Faculty(
            f_name=payload.f_name.strip(),
            l_name=payload.l_name.strip(),
            email=email,
            phone=payload.phone,
            address=payload.address,
            role=payload.role,
            password_hash=hash_password(payload.password) if payload.password else None,
        )
        db.add(obj)
        await db.commit()
        await db.refresh(obj)
    except IntegrityError:
        await db.rollback()
        raise ConflictError(f"Faculty with email {email} already exists.")
    logger.info("Registered faculty id=%s", obj.id)
    return _to_response(obj)


async def list_faculty(db: AsyncSession) -> List[FacultyResponse]:
    result = await db.execute(select(Faculty).order_by(Faculty.f_name, Faculty.l_name))
    return [_to_response(f) for f in result.scalars().all()]
