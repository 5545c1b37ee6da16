from pydantic import BaseModel, field_validator

class TripCreate(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def clean_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Trip name is required and must be a valid string.")
        return v

class TripOut(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True
