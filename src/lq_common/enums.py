"""Global enums shared by the pool engine and the API."""

from enum import Enum


class Asset(str, Enum):
    A = "A"
    B = "B"


class LiquidityAction(str, Enum):
    """Ledger write actions; each one is guarded against re-submission while pending."""
    APPROVE_A = "APPROVE_A"
    APPROVE_B = "APPROVE_B"
    ADD_LIQUIDITY = "ADD_LIQUIDITY"
    REMOVE_LIQUIDITY = "REMOVE_LIQUIDITY"
