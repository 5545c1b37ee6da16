from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, Boolean
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func, false
from tripsplit.db.session import Base

# paid_by / user_id are plain columns, not foreign keys. Rows of a deleted
# user stay and reports show them as "User Not Found".

class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    paid_by = Column(Integer, nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    description = Column(String, nullable=False, server_default="")
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    trip = relationship("Trip", back_populates="transactions")
    contributions = relationship(
        "Contribution",
        back_populates="transaction",
        cascade="all, delete-orphan",
        order_by="Contribution.id",
        lazy="selectin"
    )


class Contribution(Base):
    __tablename__ = "contributions"

    id = Column(Integer, primary_key=True)
    transaction_id = Column(Integer, ForeignKey("transactions.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    payment_done = Column(Boolean, nullable=False, server_default=false())

    transaction = relationship("Transaction", back_populates="contributions")
