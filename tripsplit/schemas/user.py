from pydantic import BaseModel, field_validator
from datetime import datetime

def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Found empty credentials.")
    return v

class UserCreate(BaseModel):
    name: str
    phone_no: str

    @field_validator("name", "phone_no")
    @classmethod
    def clean(cls, v: str) -> str:
        return _strip_required(v)

class UserUpdate(BaseModel):
    name: str | None = None
    phone_no: str | None = None

    @field_validator("name", "phone_no")
    @classmethod
    def clean(cls, v):
        return None if v is None else _strip_required(v)

class UserOut(BaseModel):
    id: int
    name: str
    phone_no: str
    created_at: datetime | None = None

    class Config:
        from_attributes = True
