"""Pool ratio model: mirrors the reserve ratio reported by the ledger.

The raw ratio is taken on scaled integers; the decimal adjustment converts it
into a ratio between human-readable quantities of A and B.
"""

from config.settings import settings
from src.lq_pool.domain.models import PoolSnapshot, TokenMeta


def is_first_deposit(pool: PoolSnapshot) -> bool:
    """Uninitialized pool: the next depositor sets the ratio."""
    return pool.reserve_a == 0 and pool.reserve_b == 0


def has_liquidity(pool: PoolSnapshot) -> bool:
    return pool.reserve_a > 0 and pool.reserve_b > 0


def raw_ratio(pool: PoolSnapshot) -> float:
    """reserve_b / reserve_a on scaled units; FIRST_DEPOSIT_RATIO when not both positive."""
    if not has_liquidity(pool):
        return settings.FIRST_DEPOSIT_RATIO
    return pool.reserve_b / pool.reserve_a


def decimal_adjusted_ratio(pool: PoolSnapshot, token_a: TokenMeta, token_b: TokenMeta) -> float:
    """Human B per human A: raw_ratio * 10 ** (decimals_a - decimals_b)."""
    return raw_ratio(pool) * 10 ** (token_a.decimals - token_b.decimals)


def ratio_display(pool: PoolSnapshot, token_a: TokenMeta, token_b: TokenMeta) -> str:
    """'1 TKA = 50.000000 USDC', or '' while the pool has no liquidity."""
    if not has_liquidity(pool):
        return ""
    ratio = decimal_adjusted_ratio(pool, token_a, token_b)
    return f"1 {token_a.symbol} = {ratio:.6f} {token_b.symbol}"
