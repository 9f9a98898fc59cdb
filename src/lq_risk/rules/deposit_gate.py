from src.lq_common.errors import InvalidAmountsError, RatioMismatchError
from src.lq_common.units import is_positive_amount
from src.lq_pool.domain.models import DepositDraft


def check_deposit_amounts(draft: DepositDraft) -> None:
    """Raise InvalidAmountsError(1001) unless both amounts are present and > 0."""
    if not (is_positive_amount(draft.amount_a) and is_positive_amount(draft.amount_b)):
        raise InvalidAmountsError()


def check_deposit_units(amount_a: int, amount_b: int) -> None:
    """Raise InvalidAmountsError(1001) if either side scales to 0 base units."""
    if amount_a <= 0 or amount_b <= 0:
        raise InvalidAmountsError()


def check_pool_ratio(draft: DepositDraft, first_deposit: bool) -> None:
    """Raise RatioMismatchError(2001) if an existing pool's ratio diagnostic is set."""
    if not first_deposit and draft.ratio_error:
        raise RatioMismatchError()
