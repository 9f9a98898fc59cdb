"""Assemble a LedgerSnapshot from the read collaborator.

All reads are issued concurrently. Token decimals fall back to the configured
defaults while the ledger has not reported them yet.
"""

import asyncio

from config.settings import settings
from src.lq_pool.domain.ledger import LedgerReader
from src.lq_pool.domain.models import (
    AllowanceState,
    LedgerSnapshot,
    PoolContext,
    PoolSnapshot,
    TokenBalances,
    TokenMeta,
    UserLiquidity,
)


async def load_snapshot(reader: LedgerReader, ctx: PoolContext) -> LedgerSnapshot:
    (
        reserves,
        user_liquidity,
        balance_a,
        balance_b,
        symbol_a,
        symbol_b,
        decimals_a,
        decimals_b,
        allowance_a,
        allowance_b,
    ) = await asyncio.gather(
        reader.get_reserves(),
        reader.get_user_liquidity(ctx.owner),
        reader.balance_of(ctx.token_a, ctx.owner),
        reader.balance_of(ctx.token_b, ctx.owner),
        reader.symbol(ctx.token_a),
        reader.symbol(ctx.token_b),
        reader.decimals(ctx.token_a),
        reader.decimals(ctx.token_b),
        reader.allowance(ctx.token_a, ctx.owner, ctx.pool),
        reader.allowance(ctx.token_b, ctx.owner, ctx.pool),
    )
    reserve_a, reserve_b, total_liquidity = reserves
    lp_amount, share_bps = user_liquidity

    return LedgerSnapshot(
        pool=PoolSnapshot(
            reserve_a=reserve_a or 0,
            reserve_b=reserve_b or 0,
            total_liquidity=total_liquidity or 0,
        ),
        token_a=TokenMeta(
            symbol=symbol_a or "",
            decimals=settings.DEFAULT_DECIMALS_A if decimals_a is None else decimals_a,
        ),
        token_b=TokenMeta(
            symbol=symbol_b or "",
            decimals=settings.DEFAULT_DECIMALS_B if decimals_b is None else decimals_b,
        ),
        allowances=AllowanceState(allowance_a=allowance_a or 0, allowance_b=allowance_b or 0),
        user_liquidity=UserLiquidity(amount=lp_amount or 0, share_basis_points=share_bps or 0),
        balances=TokenBalances(balance_a=balance_a or 0, balance_b=balance_b or 0),
    )


def empty_snapshot() -> LedgerSnapshot:
    """Placeholder until the first read completes."""
    return LedgerSnapshot(
        pool=PoolSnapshot(),
        token_a=TokenMeta(symbol="", decimals=settings.DEFAULT_DECIMALS_A),
        token_b=TokenMeta(symbol="", decimals=settings.DEFAULT_DECIMALS_B),
    )
