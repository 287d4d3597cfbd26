"""Client Types: server records, drafts, and the pending/confirmed list entry union.

Invariants:
    - Investment mirrors the server's InvestmentResponse (id is an int)
    - Pending.temp_id is a str ("pending-..."), so it can never equal a server id
    - Both entry kinds expose the record shape: id, farmer_name, amount, crop,
      created_at
    - Entries are immutable; the controller replaces them, never mutates them

Design Decisions:
    - Tagged union (Pending | Confirmed) instead of a record with a fake id:
      "awaiting confirmation" is visible in the type, not guessed from the id
    - Temp ids combine time_ns with a process counter: two creates in the same
      nanosecond still get distinct ids
"""

import itertools
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Union

from pydantic import BaseModel, ConfigDict

from farminvest.core.domain_types import InvestmentId, TempId

_temp_counter = itertools.count(1)


def new_temp_id() -> TempId:
    return TempId(f"pending-{time.time_ns()}-{next(_temp_counter)}")


class Investment(BaseModel):
    """A persisted investment as returned by the API."""
    model_config = ConfigDict(frozen=True)

    id: InvestmentId
    farmer_name: str
    amount: float
    crop: str
    created_at: datetime


class NewInvestment(BaseModel):
    """Fields submitted to create an investment."""
    model_config = ConfigDict(frozen=True)

    farmer_name: str
    amount: float
    crop: str


@dataclass(frozen=True)
class Pending:
    """A create awaiting server acknowledgment."""
    temp_id: TempId
    draft: NewInvestment
    created_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

    is_pending = True

    @property
    def id(self) -> TempId:
        return self.temp_id

    @property
    def farmer_name(self) -> str:
        return self.draft.farmer_name

    @property
    def amount(self) -> float:
        return self.draft.amount

    @property
    def crop(self) -> str:
        return self.draft.crop


@dataclass(frozen=True)
class Confirmed:
    """A record the server has stored."""
    record: Investment

    is_pending = False

    @property
    def id(self) -> InvestmentId:
        return self.record.id

    @property
    def farmer_name(self) -> str:
        return self.record.farmer_name

    @property
    def amount(self) -> float:
        return self.record.amount

    @property
    def crop(self) -> str:
        return self.record.crop

    @property
    def created_at(self) -> datetime:
        return self.record.created_at


ListEntry = Union[Pending, Confirmed]
