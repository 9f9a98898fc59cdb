from src.lq_common.errors import InsufficientLiquidityError, InvalidAmountError
from src.lq_pool.domain.models import UserLiquidity, WithdrawalDraft
from src.lq_pool.domain.withdrawal import lp_units


def check_remove_amount(draft: WithdrawalDraft) -> int:
    """Raise InvalidAmountError(1002) unless the LP amount is > 0; return it in LP units."""
    units = lp_units(draft.remove_amount)
    if units is None or units <= 0:
        raise InvalidAmountError()
    return units


def check_liquidity_sufficient(units: int, user_liquidity: UserLiquidity) -> None:
    """Raise InsufficientLiquidityError(1003) if burning more LP than the user holds."""
    if units > user_liquidity.amount:
        raise InsufficientLiquidityError(units, user_liquidity.amount)
