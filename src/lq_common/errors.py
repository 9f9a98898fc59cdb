"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Input validation (amounts, liquidity)
  2xxx: Pool ratio
  3xxx: Ledger actions (approve / add / remove)
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Input validation ---

class InvalidAmountsError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Enter valid amounts", 422)


class InvalidAmountError(AppError):
    def __init__(self) -> None:
        super().__init__(1002, "Enter valid amount", 422)


class InsufficientLiquidityError(AppError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            1003,
            f"Insufficient liquidity: required {required}, available {available}",
            422,
        )


# --- 2xxx: Pool ratio ---

class RatioMismatchError(AppError):
    def __init__(self) -> None:
        super().__init__(2001, "Amounts must match pool ratio", 422)


# --- 3xxx: Ledger actions ---

class ActionInFlightError(AppError):
    def __init__(self, action: str) -> None:
        super().__init__(3001, f"{action} is already in progress", 409)


_WRITE_FAILURE_MESSAGES: dict[str, str] = {
    "APPROVE_A": "Approval failed",
    "APPROVE_B": "Approval failed",
    "ADD_LIQUIDITY": "Add liquidity failed",
    "REMOVE_LIQUIDITY": "Remove liquidity failed",
}


class LedgerWriteError(AppError):
    """Write collaborator rejected or reverted the transaction."""

    def __init__(self, action: str) -> None:
        self.action = action
        super().__init__(
            3002, _WRITE_FAILURE_MESSAGES.get(action, "Transaction failed"), 502
        )
