from pydantic import BaseModel, Field

class SettlementOut(BaseModel):
    from_name: str = Field(serialization_alias="from")
    from_id: int
    to_name: str = Field(serialization_alias="to")
    to_id: int
    amount: float

class TripReportOut(BaseModel):
    balances: dict[str, float]
    settlements: list[SettlementOut]

class SpendingSummaryOut(BaseModel):
    user_id: int
    user_name: str
    total_spent: float
    total_spent_on_self: float
