"""Proportional payout for burning LP tokens.

payout = lp_units * reserve // total_liquidity, in exact integers with floor
division, as the pool contract computes it.
"""

from config.settings import settings
from src.lq_common.units import parse_units
from src.lq_pool.domain.models import Payout, PoolSnapshot


def lp_units(remove_amount: str) -> int | None:
    """Scaled LP units for the typed amount, or None when empty/malformed."""
    if not remove_amount:
        return None
    try:
        return parse_units(remove_amount, settings.LP_DECIMALS)
    except ValueError:
        return None


def payout_for_units(units: int, pool: PoolSnapshot) -> Payout:
    if units <= 0 or pool.total_liquidity == 0:
        return Payout()
    return Payout(
        expected_a=units * pool.reserve_a // pool.total_liquidity,
        expected_b=units * pool.reserve_b // pool.total_liquidity,
    )


def expected_payout(remove_amount: str, pool: PoolSnapshot) -> Payout:
    units = lp_units(remove_amount)
    if units is None:
        return Payout()
    return payout_for_units(units, pool)
