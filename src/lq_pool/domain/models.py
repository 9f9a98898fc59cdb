"""Domain models for lq_pool — pure dataclasses, no I/O dependency.

Ledger-owned snapshots are frozen; the engine only reads them.
Drafts are the transient, user-edited state of one panel session.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PoolContext:
    """Addresses the session acts on, passed in explicitly."""
    owner: str
    pool: str
    token_a: str
    token_b: str


@dataclass(frozen=True)
class PoolSnapshot:
    reserve_a: int = 0          # scaled by token A decimals
    reserve_b: int = 0          # scaled by token B decimals
    total_liquidity: int = 0    # LP units, 18 decimals


@dataclass(frozen=True)
class TokenMeta:
    symbol: str
    decimals: int

    def __post_init__(self) -> None:
        if self.decimals < 0:
            raise ValueError(f"decimals must be >= 0, got {self.decimals}")


@dataclass(frozen=True)
class AllowanceState:
    allowance_a: int = 0
    allowance_b: int = 0


@dataclass(frozen=True)
class UserLiquidity:
    amount: int = 0                 # LP units, 18 decimals
    share_basis_points: int = 0     # 0..10000

    @property
    def share_percent(self) -> float:
        return self.share_basis_points / 100


@dataclass(frozen=True)
class TokenBalances:
    balance_a: int = 0
    balance_b: int = 0


@dataclass(frozen=True)
class LedgerSnapshot:
    """Everything read from the ledger for one evaluation."""
    pool: PoolSnapshot
    token_a: TokenMeta
    token_b: TokenMeta
    allowances: AllowanceState = field(default_factory=AllowanceState)
    user_liquidity: UserLiquidity = field(default_factory=UserLiquidity)
    balances: TokenBalances = field(default_factory=TokenBalances)


@dataclass(frozen=True)
class DepositDraft:
    amount_a: str = ""
    amount_b: str = ""
    ratio_error: str = ""   # derived, re-computed from the current pair


@dataclass(frozen=True)
class WithdrawalDraft:
    remove_amount: str = ""


@dataclass(frozen=True)
class Payout:
    expected_a: int = 0
    expected_b: int = 0
