from decimal import Decimal
from pydantic import BaseModel, Field
from typing import Annotated, List
from datetime import datetime

Money = Annotated[Decimal, Field(ge=0, max_digits=12, decimal_places=2)]

class ContributionIn(BaseModel):
    user_id: int
    amount: Money
    payment_done: bool = False

class TransactionCreate(BaseModel):
    amount: Money
    description: str = ""
    paid_by: int
    trip_id: int
    contribution: List[ContributionIn] = Field(min_length=1)

class TransactionUpdate(BaseModel):
    amount: Money | None = None
    description: str | None = None
    paid_by: int | None = None
    trip_id: int | None = None
    contribution: List[ContributionIn] | None = Field(default=None, min_length=1)

class ContributionOut(BaseModel):
    user_id: int
    amount: float
    payment_done: bool

    class Config:
        from_attributes = True

class TransactionOut(BaseModel):
    id: int
    trip_id: int
    paid_by: int
    amount: float
    description: str
    created_at: datetime | None = None
    contributions: List[ContributionOut]

    class Config:
        from_attributes = True
