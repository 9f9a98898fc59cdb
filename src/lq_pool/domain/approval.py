"""Approval sufficiency: does the current allowance cover the amount to deposit?"""

from src.lq_common.units import parse_units
from src.lq_pool.domain.models import AllowanceState, DepositDraft, TokenMeta


def required_allowance(amount: str, decimals: int) -> int | None:
    """Scaled units the pool must be allowed to pull; 0 for an empty field, None if malformed."""
    if not amount:
        return 0
    try:
        return parse_units(amount, decimals)
    except ValueError:
        return None


def is_approved(allowance: int, amount: str, decimals: int) -> bool:
    required = required_allowance(amount, decimals)
    if required is None:
        return False
    return allowance >= required


def approval_flags(
    draft: DepositDraft,
    allowances: AllowanceState,
    token_a: TokenMeta,
    token_b: TokenMeta,
) -> tuple[bool, bool]:
    """(approved_a, approved_b) for the current draft."""
    return (
        is_approved(allowances.allowance_a, draft.amount_a, token_a.decimals),
        is_approved(allowances.allowance_b, draft.amount_b, token_b.decimals),
    )
