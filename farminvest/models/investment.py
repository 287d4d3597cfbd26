"""Investment ORM: the single persisted table.

Invariants:
    - id is an autoincrement integer primary key, never reused or updated
    - created_at is set once at insertion (timezone-aware)
    - Rows are only written by InvestmentService.create_investment(), which
      validates before insert

Design Decisions:
    - NUMERIC(12, 2) with asdecimal=False: money precision in the column,
      plain floats in Python and JSON
    - Index on created_at: the only read path orders by it
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from farminvest.core.domain_types import (
    AMOUNT_PRECISION, AMOUNT_SCALE, CROP_MAX_LENGTH, FARMER_NAME_MAX_LENGTH,
)
from farminvest.db.base import Base


class Investment(Base):
    """A farmer's investment in a crop."""
    __tablename__ = "investments"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_investments_amount_positive"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    farmer_name: Mapped[str] = mapped_column(
        String(FARMER_NAME_MAX_LENGTH), nullable=False,
    )
    amount: Mapped[float] = mapped_column(
        Numeric(AMOUNT_PRECISION, AMOUNT_SCALE, asdecimal=False),
        nullable=False,
    )
    crop: Mapped[str] = mapped_column(
        String(CROP_MAX_LENGTH), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Investment id={self.id} farmer={self.farmer_name!r} crop={self.crop!r}>"
