"""Investment List Controller: in-memory list with optimistic create.

Invariants:
    - items is ordered most-recent-first; Pending entries sit ahead of the
      Confirmed records they were inserted before
    - At most one entry per temp id exists at any time
    - create() failure restores items exactly as they were before the call
      (the pending entry is removed, nothing else is touched) and re-raises
    - create() success replaces the pending entry in place with the server record
    - Only the most recently started load()/refresh() may apply its response;
      superseded responses are dropped
    - After close(), no response mutates state

Design Decisions:
    - Single event loop, no locks: items is only mutated between awaits
    - A landing load keeps in-flight Pending entries, otherwise their later
      confirmation would have nothing to replace
    - If a load already brought in the server record before its create
      confirmed, the pending entry is dropped instead of duplicating the row
"""

import logging
from typing import Protocol

from farminvest.client.errors import ApiError
from farminvest.client.types import (
    Confirmed, Investment, ListEntry, NewInvestment, Pending, new_temp_id,
)
from farminvest.core.domain_types import TempId

logger = logging.getLogger(__name__)


class InvestmentsApi(Protocol):
    """What the controller needs from the API client."""
    async def fetch_investments(self) -> list[Investment]: ...
    async def create_investment(self, draft: NewInvestment) -> Investment: ...


class InvestmentListController:
    """Holds the investment list shown to the user."""

    def __init__(self, api: InvestmentsApi):
        self._api = api
        self._items: list[ListEntry] = []
        self._load_seq = 0
        self._closed = False
        self.is_loading = False
        self.is_refreshing = False
        self.has_loaded = False
        self.last_error: ApiError | None = None

    @property
    def items(self) -> list[ListEntry]:
        return list(self._items)

    @property
    def pending_count(self) -> int:
        return sum(1 for e in self._items if isinstance(e, Pending))

    @property
    def show_error_state(self) -> bool:
        """Full-screen error with retry: a failed load and nothing to show."""
        return self.last_error is not None and not self._items

    @property
    def is_empty(self) -> bool:
        return self.has_loaded and self.last_error is None and not self._items

    # ─── Fetch ──────────────────────────────────────────────────

    async def load(self) -> None:
        """Fetch the list. Failures land in last_error, items stay as they were."""
        self.is_loading = True
        await self._fetch()

    async def refresh(self) -> None:
        """Same as load(), driving the pull-to-refresh spinner instead."""
        self.is_refreshing = True
        await self._fetch()

    async def _fetch(self) -> None:
        self._load_seq += 1
        seq = self._load_seq
        try:
            records = await self._api.fetch_investments()
        except ApiError as e:
            if self._is_current(seq):
                self.last_error = e
                self._finish_fetch()
                logger.warning(
                    f"Error loading investments: {e.message}",
                    extra={"status_code": e.status_code},
                )
            return

        if not self._is_current(seq):
            logger.debug(f"Dropping stale load response #{seq}")
            return
        pending = [e for e in self._items if isinstance(e, Pending)]
        self._items = pending + [Confirmed(r) for r in records]
        self.last_error = None
        self._finish_fetch()
        logger.debug("Investments loaded", extra={"count": len(records)})

    def _is_current(self, seq: int) -> bool:
        return not self._closed and seq == self._load_seq

    def _finish_fetch(self) -> None:
        self.is_loading = False
        self.is_refreshing = False
        self.has_loaded = True

    # ─── Create ─────────────────────────────────────────────────

    async def create(
        self, farmer_name: str, amount: float, crop: str,
    ) -> Investment:
        """Insert optimistically, then confirm or roll back.

        Raises whatever create_investment raised after the pending entry has
        been removed, so the caller can alert the user.
        """
        draft = NewInvestment(farmer_name=farmer_name, amount=amount, crop=crop)
        pending = Pending(new_temp_id(), draft)
        self._items.insert(0, pending)

        try:
            record = await self._api.create_investment(draft)
        except BaseException:
            # BaseException: a cancelled create must not leave its entry behind
            if not self._closed:
                self._remove(pending.temp_id)
            logger.info(
                "Create failed, optimistic entry rolled back",
                extra={"temp_id": pending.temp_id},
            )
            raise

        if not self._closed:
            self._confirm(pending.temp_id, record)
        return record

    def _index_of(self, temp_id: TempId) -> int | None:
        for i, entry in enumerate(self._items):
            if isinstance(entry, Pending) and entry.temp_id == temp_id:
                return i
        return None

    def _remove(self, temp_id: TempId) -> None:
        index = self._index_of(temp_id)
        if index is not None:
            del self._items[index]

    def _confirm(self, temp_id: TempId, record: Investment) -> None:
        index = self._index_of(temp_id)
        if index is None:
            return
        already_listed = any(
            isinstance(e, Confirmed) and e.id == record.id for e in self._items
        )
        if already_listed:
            del self._items[index]
        else:
            self._items[index] = Confirmed(record)
        logger.debug(
            "Optimistic entry confirmed",
            extra={"temp_id": temp_id, "investment_id": record.id},
        )

    def close(self) -> None:
        """Tear down; responses arriving afterwards are ignored."""
        self._closed = True
