"""Panel derivation: every value the rendering layer shows, from explicit inputs.

derive_panel depends only on (snapshot, deposit draft, withdrawal draft, actions
in flight); callers invoke it after each keystroke, refreshed snapshot or
action start/finish. A control whose action is in flight is never offered.
"""

from dataclasses import dataclass, replace

from config.settings import settings
from src.lq_common.enums import LiquidityAction
from src.lq_common.units import format_balance, positive_units
from src.lq_pool.domain.approval import approval_flags
from src.lq_pool.domain.models import DepositDraft, LedgerSnapshot, Payout, WithdrawalDraft
from src.lq_pool.domain.ratio import decimal_adjusted_ratio, is_first_deposit, ratio_display
from src.lq_pool.domain.validation import validate_ratio
from src.lq_pool.domain.withdrawal import expected_payout


@dataclass(frozen=True)
class PanelView:
    deposit: DepositDraft
    withdrawal: WithdrawalDraft
    # Ratio
    first_deposit: bool
    ratio: float
    ratio_display: str
    ratio_error: str
    # Approvals / controls
    approved_a: bool
    approved_b: bool
    can_approve_a: bool
    can_approve_b: bool
    can_deposit: bool
    deposit_label: str
    # Withdrawal
    payout: Payout
    expected_a_display: str
    expected_b_display: str
    can_remove: bool
    # Pool / wallet stats
    reserve_a_display: str
    reserve_b_display: str
    balance_a_display: str
    balance_b_display: str
    lp_balance_display: str
    share_display: str


def revalidate(draft: DepositDraft, snapshot: LedgerSnapshot) -> DepositDraft:
    """Re-derive the ratio diagnostic from the draft's current pair."""
    error = validate_ratio(
        draft.amount_a, draft.amount_b, snapshot.pool, snapshot.token_a, snapshot.token_b
    )
    return replace(draft, ratio_error=error)


def derive_panel(
    snapshot: LedgerSnapshot,
    deposit: DepositDraft,
    withdrawal: WithdrawalDraft,
    in_flight: frozenset[LiquidityAction] = frozenset(),
) -> PanelView:
    pool, token_a, token_b = snapshot.pool, snapshot.token_a, snapshot.token_b
    deposit = revalidate(deposit, snapshot)
    first = is_first_deposit(pool)

    approved_a, approved_b = approval_flags(deposit, snapshot.allowances, token_a, token_b)
    # Same condition the deposit gate enforces on the scaled amounts
    amounts_valid = (
        positive_units(deposit.amount_a, token_a.decimals) is not None
        and positive_units(deposit.amount_b, token_b.decimals) is not None
    )
    ratio_ok = first or not deposit.ratio_error
    remove_valid = positive_units(withdrawal.remove_amount, settings.LP_DECIMALS) is not None

    payout = expected_payout(withdrawal.remove_amount, pool)

    return PanelView(
        deposit=deposit,
        withdrawal=withdrawal,
        first_deposit=first,
        ratio=decimal_adjusted_ratio(pool, token_a, token_b),
        ratio_display=ratio_display(pool, token_a, token_b),
        ratio_error=deposit.ratio_error,
        approved_a=approved_a,
        approved_b=approved_b,
        can_approve_a=(
            not approved_a
            and bool(deposit.amount_a)
            and LiquidityAction.APPROVE_A not in in_flight
        ),
        can_approve_b=(
            not approved_b
            and bool(deposit.amount_b)
            and LiquidityAction.APPROVE_B not in in_flight
        ),
        can_deposit=(
            approved_a
            and approved_b
            and amounts_valid
            and ratio_ok
            and LiquidityAction.ADD_LIQUIDITY not in in_flight
        ),
        deposit_label="Create Pool" if first else "Add Liquidity",
        payout=payout,
        expected_a_display=format_balance(payout.expected_a, token_a.decimals),
        expected_b_display=format_balance(payout.expected_b, token_b.decimals),
        can_remove=remove_valid and LiquidityAction.REMOVE_LIQUIDITY not in in_flight,
        reserve_a_display=format_balance(pool.reserve_a, token_a.decimals),
        reserve_b_display=format_balance(pool.reserve_b, token_b.decimals),
        balance_a_display=format_balance(snapshot.balances.balance_a, token_a.decimals),
        balance_b_display=format_balance(snapshot.balances.balance_b, token_b.decimals),
        lp_balance_display=format_balance(snapshot.user_liquidity.amount, settings.LP_DECIMALS),
        share_display=f"{snapshot.user_liquidity.share_percent:.2f}%",
    )
