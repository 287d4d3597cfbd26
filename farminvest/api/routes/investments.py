"""Investment Routes: list and create investment records.

Invariants:
    - POST body is validated by InvestmentCreate before the handler runs;
      failures reach the RequestValidationError handler as a 400
    - POST answers 201 with the full persisted record so clients can reconcile
    - GET returns a bare JSON array (no pagination envelope)
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from farminvest.infrastructure.database import get_db
from farminvest.schemas.investment import InvestmentCreate, InvestmentResponse
from farminvest.services.investment_service import InvestmentService

router = APIRouter(prefix="/api/investments", tags=["investments"])


def get_investment_service(
    db: AsyncSession = Depends(get_db),
) -> InvestmentService:
    return InvestmentService(db)


@router.get("", response_model=list[InvestmentResponse])
async def list_investments(
    service: InvestmentService = Depends(get_investment_service),
):
    """List all investments, newest first."""
    return await service.list_investments()


@router.post(
    "", response_model=InvestmentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_investment(
    body: InvestmentCreate,
    service: InvestmentService = Depends(get_investment_service),
):
    """Create an investment and return the stored record."""
    return await service.create_investment(body)
