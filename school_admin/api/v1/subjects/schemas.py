from datetime import datetime

from pydantic import BaseModel, Field


class SubjectCreate(BaseModel):
    subject_name: str = Field(..., min_length=1, max_length=255)


class SubjectResponse(BaseModel):
    id: int
    subject_name: str
    created_at: datetime

    class Config:
        from_attributes = True
