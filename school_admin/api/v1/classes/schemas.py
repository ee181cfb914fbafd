from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ClassCreate(BaseModel):
    standard: str = Field(..., min_length=1, max_length=20)
    division: str = Field(..., min_length=1, max_length=10)


class ClassUpdate(BaseModel):
    standard: Optional[str] = Field(None, min_length=1, max_length=20)
    division: Optional[str] = Field(None, min_length=1, max_length=10)


class ClassResponse(BaseModel):
    id: int
    standard: str
    division: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
