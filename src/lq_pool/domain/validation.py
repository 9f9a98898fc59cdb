"""Ratio validation for deposits into a pool that already has liquidity."""

import logging

from config.settings import settings
from src.lq_common.units import to_human
from src.lq_pool.domain.models import PoolSnapshot, TokenMeta
from src.lq_pool.domain.ratio import decimal_adjusted_ratio, has_liquidity

logger = logging.getLogger(__name__)


def validate_ratio(
    amount_a: str,
    amount_b: str,
    pool: PoolSnapshot,
    token_a: TokenMeta,
    token_b: TokenMeta,
) -> str:
    """Return the mismatch diagnostic for the pair, or '' when acceptable.

    Skipped for first deposits (the pair defines the ratio) and for incomplete
    input. The pair is rejected when |b - expected_b| / expected_b > RATIO_TOLERANCE.
    """
    if not has_liquidity(pool):
        return ""
    value_a = to_human(amount_a)
    value_b = to_human(amount_b)
    if value_a is None or value_b is None or value_a <= 0 or value_b <= 0:
        return ""

    expected_b = value_a * decimal_adjusted_ratio(pool, token_a, token_b)
    if expected_b <= 0:
        return ""

    relative_error = abs(value_b - expected_b) / expected_b
    if relative_error <= settings.RATIO_TOLERANCE:
        return ""

    logger.debug(
        "Ratio mismatch: a=%s b=%s expected_b=%.6f error=%.4f",
        amount_a, amount_b, expected_b, relative_error,
    )
    return (
        f"Ratio mismatch! Expected {expected_b:.4f} {token_b.symbol}"
        f" for {amount_a} {token_a.symbol}"
    )
