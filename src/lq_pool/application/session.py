"""LiquiditySession: one user's panel: drafts, action handlers, ledger refresh.

Keystroke and snapshot handlers are synchronous and re-derive state from pure
domain functions. Ledger writes are the only suspension points:
  - each LiquidityAction is guarded while in flight (no duplicate submission)
  - input checks run before the write collaborator is called
  - collaborator failures are logged and re-raised as LedgerWriteError; drafts survive
  - a confirmed write schedules a delayed re-read; the latest read wins
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from dataclasses import replace
from typing import Any

from config.settings import settings
from src.lq_common.enums import Asset, LiquidityAction
from src.lq_common.errors import ActionInFlightError, InvalidAmountError, LedgerWriteError
from src.lq_common.units import format_units, parse_units
from src.lq_pool.application.schemas import ActionResult
from src.lq_pool.application.snapshot import empty_snapshot, load_snapshot
from src.lq_pool.domain.autofill import edit_amount
from src.lq_pool.domain.ledger import LedgerReader, LedgerWriter
from src.lq_pool.domain.models import DepositDraft, LedgerSnapshot, PoolContext, WithdrawalDraft
from src.lq_pool.domain.panel import PanelView, derive_panel, revalidate
from src.lq_pool.domain.ratio import is_first_deposit
from src.lq_risk.rules.deposit_gate import (
    check_deposit_amounts,
    check_deposit_units,
    check_pool_ratio,
)
from src.lq_risk.rules.withdrawal_gate import check_liquidity_sufficient, check_remove_amount

logger = logging.getLogger(__name__)


class LiquiditySession:
    def __init__(
        self,
        ctx: PoolContext,
        reader: LedgerReader,
        writer: LedgerWriter,
        snapshot: LedgerSnapshot | None = None,
        refresh_delay: float | None = None,
    ) -> None:
        self._ctx = ctx
        self._reader = reader
        self._writer = writer
        self._snapshot: LedgerSnapshot = snapshot or empty_snapshot()
        self._deposit = DepositDraft()
        self._withdrawal = WithdrawalDraft()
        self._in_flight: set[LiquidityAction] = set()
        self._refresh_delay = (
            settings.REFRESH_DELAY_SECONDS if refresh_delay is None else refresh_delay
        )
        self._issued_seq = 0
        self._applied_seq = 0
        self._pending_refreshes: set[asyncio.Task[None]] = set()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def snapshot(self) -> LedgerSnapshot:
        return self._snapshot

    @property
    def deposit(self) -> DepositDraft:
        return self._deposit

    @property
    def withdrawal(self) -> WithdrawalDraft:
        return self._withdrawal

    @property
    def in_flight(self) -> frozenset[LiquidityAction]:
        return frozenset(self._in_flight)

    def view(self) -> PanelView:
        return derive_panel(
            self._snapshot, self._deposit, self._withdrawal, self.in_flight
        )

    # ------------------------------------------------------------------
    # Keystrokes
    # ------------------------------------------------------------------

    def edit_amount_a(self, value: str) -> PanelView:
        return self._edit(Asset.A, value)

    def edit_amount_b(self, value: str) -> PanelView:
        return self._edit(Asset.B, value)

    def _edit(self, asset: Asset, value: str) -> PanelView:
        snap = self._snapshot
        draft = edit_amount(self._deposit, asset, value, snap.pool, snap.token_a, snap.token_b)
        self._deposit = revalidate(draft, snap)
        return self.view()

    def edit_remove_amount(self, value: str) -> PanelView:
        self._withdrawal = replace(self._withdrawal, remove_amount=value)
        return self.view()

    def set_max_remove(self) -> PanelView:
        """Fill the withdrawal with the full LP balance (exact, not the rounded display)."""
        amount = self._snapshot.user_liquidity.amount
        value = format_units(amount, settings.LP_DECIMALS) if amount > 0 else ""
        return self.edit_remove_amount(value)

    def clear(self) -> PanelView:
        self._deposit = DepositDraft()
        self._withdrawal = WithdrawalDraft()
        return self.view()

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def apply_snapshot(self, snapshot: LedgerSnapshot, seq: int | None = None) -> bool:
        """Install a ledger read. Reads older than the last applied one are dropped.

        A snapshot pushed without a seq counts as the newest read.
        """
        if seq is None:
            self._issued_seq += 1
            seq = self._issued_seq
        if seq <= self._applied_seq:
            logger.warning(
                "Dropping stale ledger read: seq=%d applied=%d", seq, self._applied_seq
            )
            return False
        self._applied_seq = seq
        self._snapshot = snapshot
        self._deposit = revalidate(self._deposit, snapshot)
        logger.info(
            "Snapshot applied: reserves=(%d, %d) total_liquidity=%d",
            snapshot.pool.reserve_a,
            snapshot.pool.reserve_b,
            snapshot.pool.total_liquidity,
        )
        return True

    async def refresh(self) -> bool:
        self._issued_seq += 1
        seq = self._issued_seq
        snapshot = await load_snapshot(self._reader, self._ctx)
        return self.apply_snapshot(snapshot, seq)

    def _schedule_refresh(self) -> None:
        task = asyncio.create_task(self._refresh_later())
        self._pending_refreshes.add(task)
        task.add_done_callback(self._pending_refreshes.discard)

    async def _refresh_later(self) -> None:
        await asyncio.sleep(self._refresh_delay)
        try:
            await self.refresh()
        except Exception:
            logger.exception("Ledger refresh failed; keeping last snapshot")

    async def drain_refreshes(self) -> None:
        """Wait for every scheduled refresh to finish."""
        while self._pending_refreshes:
            await asyncio.gather(*list(self._pending_refreshes), return_exceptions=True)

    async def aclose(self) -> None:
        for task in list(self._pending_refreshes):
            task.cancel()
        await asyncio.gather(*self._pending_refreshes, return_exceptions=True)
        self._pending_refreshes.clear()

    # ------------------------------------------------------------------
    # Ledger actions
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def _guard(self, action: LiquidityAction) -> AsyncIterator[None]:
        if action in self._in_flight:
            raise ActionInFlightError(action.value)
        self._in_flight.add(action)
        try:
            yield
        finally:
            self._in_flight.discard(action)

    async def _submit(
        self, action: LiquidityAction, call: Callable[[], Awaitable[Any]]
    ) -> None:
        logger.info("Submitting %s", action.value)
        try:
            result = await call()
        except Exception as exc:
            logger.exception("%s failed", action.value)
            raise LedgerWriteError(action.value) from exc
        if not result:
            logger.error("%s rejected by ledger", action.value)
            raise LedgerWriteError(action.value)
        logger.info("%s confirmed", action.value)

    async def approve_a(self) -> ActionResult:
        return await self._approve(Asset.A)

    async def approve_b(self) -> ActionResult:
        return await self._approve(Asset.B)

    async def _approve(self, asset: Asset) -> ActionResult:
        if asset == Asset.A:
            action, token, meta, amount = (
                LiquidityAction.APPROVE_A,
                self._ctx.token_a,
                self._snapshot.token_a,
                self._deposit.amount_a,
            )
        else:
            action, token, meta, amount = (
                LiquidityAction.APPROVE_B,
                self._ctx.token_b,
                self._snapshot.token_b,
                self._deposit.amount_b,
            )
        async with self._guard(action):
            units = _approval_units(amount, meta.decimals)
            await self._submit(action, lambda: self._writer.approve(token, self._ctx.pool, units))
        self._schedule_refresh()
        return ActionResult(action=action, message=f"Token {asset.value} approved!")

    async def add_liquidity(self) -> ActionResult:
        action = LiquidityAction.ADD_LIQUIDITY
        async with self._guard(action):
            snap = self._snapshot
            draft = revalidate(self._deposit, snap)
            check_deposit_amounts(draft)
            check_pool_ratio(draft, is_first_deposit(snap.pool))
            amount_a = parse_units(draft.amount_a, snap.token_a.decimals)
            amount_b = parse_units(draft.amount_b, snap.token_b.decimals)
            check_deposit_units(amount_a, amount_b)
            await self._submit(action, lambda: self._writer.add_liquidity(amount_a, amount_b))
            # Edits typed while the write was pending survive
            if (self._deposit.amount_a, self._deposit.amount_b) == (draft.amount_a, draft.amount_b):
                self._deposit = DepositDraft()
        self._schedule_refresh()
        return ActionResult(action=action, message="Liquidity added!")

    async def remove_liquidity(self) -> ActionResult:
        action = LiquidityAction.REMOVE_LIQUIDITY
        async with self._guard(action):
            submitted = self._withdrawal
            units = check_remove_amount(submitted)
            check_liquidity_sufficient(units, self._snapshot.user_liquidity)
            await self._submit(action, lambda: self._writer.remove_liquidity(units))
            if self._withdrawal == submitted:
                self._withdrawal = WithdrawalDraft()
        self._schedule_refresh()
        return ActionResult(action=action, message="Liquidity removed!")


def _approval_units(amount: str, decimals: int) -> int:
    """Exact allowance to request for the draft amount."""
    try:
        units = parse_units(amount, decimals) if amount else 0
    except ValueError:
        units = 0
    if units <= 0:
        raise InvalidAmountError()
    return units
