"""Pydantic schemas for the liquidity panel API and session results."""

from typing import Literal

from pydantic import BaseModel, Field

from config.settings import settings
from src.lq_common.enums import LiquidityAction
from src.lq_pool.domain.models import (
    AllowanceState,
    DepositDraft,
    LedgerSnapshot,
    PoolSnapshot,
    TokenBalances,
    TokenMeta,
    UserLiquidity,
    WithdrawalDraft,
)
from src.lq_pool.domain.panel import PanelView

# Ledger amounts are uint256
UINT256_MAX = 2**256 - 1

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class TokenIn(BaseModel):
    symbol: str = ""
    decimals: int | None = Field(None, ge=0, le=77)  # 10**77 still fits uint256


class SnapshotIn(BaseModel):
    """Ledger state as read by the caller; all amounts in scaled units."""
    reserve_a: int = Field(0, ge=0, le=UINT256_MAX)
    reserve_b: int = Field(0, ge=0, le=UINT256_MAX)
    total_liquidity: int = Field(0, ge=0, le=UINT256_MAX)
    token_a: TokenIn = Field(default_factory=TokenIn)
    token_b: TokenIn = Field(default_factory=TokenIn)
    allowance_a: int = Field(0, ge=0, le=UINT256_MAX)
    allowance_b: int = Field(0, ge=0, le=UINT256_MAX)
    user_liquidity: int = Field(0, ge=0, le=UINT256_MAX)
    share_basis_points: int = Field(0, ge=0, le=10000)
    balance_a: int = Field(0, ge=0, le=UINT256_MAX)
    balance_b: int = Field(0, ge=0, le=UINT256_MAX)

    def to_domain(self) -> LedgerSnapshot:
        decimals_a = self.token_a.decimals
        decimals_b = self.token_b.decimals
        return LedgerSnapshot(
            pool=PoolSnapshot(self.reserve_a, self.reserve_b, self.total_liquidity),
            token_a=TokenMeta(
                self.token_a.symbol,
                settings.DEFAULT_DECIMALS_A if decimals_a is None else decimals_a,
            ),
            token_b=TokenMeta(
                self.token_b.symbol,
                settings.DEFAULT_DECIMALS_B if decimals_b is None else decimals_b,
            ),
            allowances=AllowanceState(self.allowance_a, self.allowance_b),
            user_liquidity=UserLiquidity(self.user_liquidity, self.share_basis_points),
            balances=TokenBalances(self.balance_a, self.balance_b),
        )


class DraftIn(BaseModel):
    amount_a: str = ""
    amount_b: str = ""
    remove_amount: str = ""

    def deposit_draft(self) -> DepositDraft:
        return DepositDraft(amount_a=self.amount_a, amount_b=self.amount_b)

    def withdrawal_draft(self) -> WithdrawalDraft:
        return WithdrawalDraft(remove_amount=self.remove_amount)


class PanelRequest(BaseModel):
    snapshot: SnapshotIn
    draft: DraftIn = Field(default_factory=DraftIn)


class EditAmountRequest(BaseModel):
    snapshot: SnapshotIn
    draft: DraftIn = Field(default_factory=DraftIn)
    side: Literal["A", "B"]
    value: str = Field("", max_length=100)


class WithdrawQuoteRequest(BaseModel):
    snapshot: SnapshotIn
    remove_amount: str = Field("", max_length=100)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class ActionResult(BaseModel):
    action: LiquidityAction
    message: str


class PanelResponse(BaseModel):
    amount_a: str
    amount_b: str
    remove_amount: str
    first_deposit: bool
    ratio: float
    ratio_display: str
    ratio_error: str
    approved_a: bool
    approved_b: bool
    can_approve_a: bool
    can_approve_b: bool
    can_deposit: bool
    deposit_label: str
    expected_a: int
    expected_b: int
    expected_a_display: str
    expected_b_display: str
    can_remove: bool
    reserve_a_display: str
    reserve_b_display: str
    balance_a_display: str
    balance_b_display: str
    lp_balance_display: str
    share_display: str

    @classmethod
    def from_view(cls, view: PanelView) -> "PanelResponse":
        return cls(
            amount_a=view.deposit.amount_a,
            amount_b=view.deposit.amount_b,
            remove_amount=view.withdrawal.remove_amount,
            first_deposit=view.first_deposit,
            ratio=view.ratio,
            ratio_display=view.ratio_display,
            ratio_error=view.ratio_error,
            approved_a=view.approved_a,
            approved_b=view.approved_b,
            can_approve_a=view.can_approve_a,
            can_approve_b=view.can_approve_b,
            can_deposit=view.can_deposit,
            deposit_label=view.deposit_label,
            expected_a=view.payout.expected_a,
            expected_b=view.payout.expected_b,
            expected_a_display=view.expected_a_display,
            expected_b_display=view.expected_b_display,
            can_remove=view.can_remove,
            reserve_a_display=view.reserve_a_display,
            reserve_b_display=view.reserve_b_display,
            balance_a_display=view.balance_a_display,
            balance_b_display=view.balance_b_display,
            lp_balance_display=view.lp_balance_display,
            share_display=view.share_display,
        )


class WithdrawQuoteResponse(BaseModel):
    remove_amount: str
    expected_a: int
    expected_b: int
    expected_a_display: str
    expected_b_display: str


class PreflightResponse(BaseModel):
    """Scaled amounts that passed the submission gate."""
    amount_a: int | None = None
    amount_b: int | None = None
    lp_amount: int | None = None
