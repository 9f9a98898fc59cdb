"""Ledger collaborator Protocols (read and write ports).

The engine never talks to a chain directly. Unit tests inject mocks that
conform to these Protocols; a deployment provides the real clients.
"""

from typing import Any, Protocol


class LedgerReader(Protocol):
    async def get_reserves(self) -> tuple[int, int, int]: ...

    async def get_user_liquidity(self, address: str) -> tuple[int, int]: ...

    async def balance_of(self, token: str, address: str) -> int: ...

    async def symbol(self, token: str) -> str: ...

    async def decimals(self, token: str) -> int | None: ...

    async def allowance(self, token: str, owner: str, spender: str) -> int: ...


class LedgerWriter(Protocol):
    """Write side. Truthy return = confirmed; falsy return or exception = failed."""

    async def approve(self, token: str, spender: str, amount: int) -> Any: ...

    async def add_liquidity(self, amount_a: int, amount_b: int) -> Any: ...

    async def remove_liquidity(self, lp_amount: int) -> Any: ...
