"""Investment Service: list and create over the investments table.

Invariants:
    - list_investments() orders by created_at DESC, then id DESC
    - create_investment() returns the full persisted row (id, created_at included)
    - A failed create rolls back; no partial row is visible afterwards
    - Storage failures raise DatabaseError carrying the driver's message as cause;
      whether the cause reaches the client is decided by the error handler

Design Decisions:
    - id DESC tie-break: rows inserted within the same clock tick still list
      newest first because ids are monotonic
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from farminvest.core.errors import DatabaseError
from farminvest.infrastructure.database import error_cause
from farminvest.models.investment import Investment
from farminvest.schemas.investment import InvestmentCreate

logger = logging.getLogger(__name__)


class InvestmentService:
    """Investment operations bound to one request-scoped session."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def list_investments(self) -> list[Investment]:
        query = select(Investment).order_by(
            Investment.created_at.desc(), Investment.id.desc(),
        )
        try:
            result = await self._db.execute(query)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching investments: {e}", exc_info=True)
            raise DatabaseError(
                "Failed to fetch investments", "select", error_cause(e),
            ) from e
        investments = list(result.scalars().all())
        logger.debug("Listed investments", extra={"count": len(investments)})
        return investments

    async def create_investment(self, data: InvestmentCreate) -> Investment:
        investment = Investment(
            farmer_name=data.farmer_name,
            amount=data.amount,
            crop=data.crop,
        )
        try:
            self._db.add(investment)
            await self._db.commit()
            await self._db.refresh(investment)
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error(f"Error creating investment: {e}", exc_info=True)
            raise DatabaseError(
                "Failed to create investment", "insert", error_cause(e),
            ) from e
        logger.info(
            "Investment created", extra={"investment_id": investment.id},
        )
        return investment

