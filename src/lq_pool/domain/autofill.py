"""Linked deposit inputs: editing one side proposes the other from the pool ratio.

The proposal is advisory. Every edit clears the ratio diagnostic; validation
re-derives it from the resulting pair.
"""

from dataclasses import replace

from src.lq_common.enums import Asset
from src.lq_common.units import to_human
from src.lq_pool.domain.models import DepositDraft, PoolSnapshot, TokenMeta
from src.lq_pool.domain.ratio import decimal_adjusted_ratio, has_liquidity, is_first_deposit


def edit_amount_a(
    draft: DepositDraft, value: str, pool: PoolSnapshot, token_a: TokenMeta, token_b: TokenMeta
) -> DepositDraft:
    """User typed into the A field: propose B = A * ratio (1:1 on first deposit)."""
    draft = replace(draft, amount_a=value, ratio_error="")
    amount = to_human(value)
    if amount is None or amount <= 0:
        return replace(draft, amount_b="")
    if is_first_deposit(pool):
        return replace(draft, amount_b=value)
    if has_liquidity(pool):
        proposed = amount * decimal_adjusted_ratio(pool, token_a, token_b)
        return replace(draft, amount_b=f"{proposed:.{token_b.decimals}f}")
    return draft


def edit_amount_b(
    draft: DepositDraft, value: str, pool: PoolSnapshot, token_a: TokenMeta, token_b: TokenMeta
) -> DepositDraft:
    """User typed into the B field: propose A = B / ratio (1:1 on first deposit)."""
    draft = replace(draft, amount_b=value, ratio_error="")
    amount = to_human(value)
    if amount is None or amount <= 0:
        return replace(draft, amount_a="")
    if is_first_deposit(pool):
        return replace(draft, amount_a=value)
    if has_liquidity(pool):
        proposed = amount / decimal_adjusted_ratio(pool, token_a, token_b)
        return replace(draft, amount_a=f"{proposed:.{token_a.decimals}f}")
    return draft


def edit_amount(
    draft: DepositDraft,
    asset: Asset,
    value: str,
    pool: PoolSnapshot,
    token_a: TokenMeta,
    token_b: TokenMeta,
) -> DepositDraft:
    if asset == Asset.A:
        return edit_amount_a(draft, value, pool, token_a, token_b)
    return edit_amount_b(draft, value, pool, token_a, token_b)
