"""lq_pool REST API: stateless panel derivation and submission preflight.

The caller owns the ledger snapshot and drafts; every request is evaluated
from scratch by the pure domain functions.
"""

from fastapi import APIRouter, Request

from src.lq_common.enums import Asset
from src.lq_common.response import ApiResponse, success_response
from src.lq_common.units import format_balance, parse_units
from src.lq_pool.application.schemas import (
    EditAmountRequest,
    PanelRequest,
    PanelResponse,
    PreflightResponse,
    WithdrawQuoteRequest,
    WithdrawQuoteResponse,
)
from src.lq_pool.domain.autofill import edit_amount
from src.lq_pool.domain.models import WithdrawalDraft
from src.lq_pool.domain.panel import derive_panel, revalidate
from src.lq_pool.domain.ratio import is_first_deposit
from src.lq_pool.domain.withdrawal import expected_payout
from src.lq_risk.rules.deposit_gate import (
    check_deposit_amounts,
    check_deposit_units,
    check_pool_ratio,
)
from src.lq_risk.rules.withdrawal_gate import check_liquidity_sufficient, check_remove_amount

router = APIRouter(prefix="/liquidity", tags=["liquidity"])


def _respond(request: Request, data: dict) -> ApiResponse:
    return success_response(data, getattr(request.state, "request_id", None))


@router.post("/panel")
async def get_panel(body: PanelRequest, request: Request) -> ApiResponse:
    view = derive_panel(
        body.snapshot.to_domain(), body.draft.deposit_draft(), body.draft.withdrawal_draft()
    )
    return _respond(request, PanelResponse.from_view(view).model_dump())


@router.post("/deposit/edit")
async def edit_deposit(body: EditAmountRequest, request: Request) -> ApiResponse:
    snapshot = body.snapshot.to_domain()
    draft = edit_amount(
        body.draft.deposit_draft(),
        Asset(body.side),
        body.value,
        snapshot.pool,
        snapshot.token_a,
        snapshot.token_b,
    )
    view = derive_panel(snapshot, draft, body.draft.withdrawal_draft())
    return _respond(request, PanelResponse.from_view(view).model_dump())


@router.post("/withdraw/quote")
async def quote_withdrawal(body: WithdrawQuoteRequest, request: Request) -> ApiResponse:
    snapshot = body.snapshot.to_domain()
    draft = WithdrawalDraft(remove_amount=body.remove_amount)
    payout = expected_payout(draft.remove_amount, snapshot.pool)
    data = WithdrawQuoteResponse(
        remove_amount=draft.remove_amount,
        expected_a=payout.expected_a,
        expected_b=payout.expected_b,
        expected_a_display=format_balance(payout.expected_a, snapshot.token_a.decimals),
        expected_b_display=format_balance(payout.expected_b, snapshot.token_b.decimals),
    )
    return _respond(request, data.model_dump())


@router.post("/deposit/preflight")
async def preflight_deposit(body: PanelRequest, request: Request) -> ApiResponse:
    """Run the deposit gate; return the exact scaled amounts to submit."""
    snapshot = body.snapshot.to_domain()
    draft = revalidate(body.draft.deposit_draft(), snapshot)
    check_deposit_amounts(draft)
    check_pool_ratio(draft, is_first_deposit(snapshot.pool))
    amount_a = parse_units(draft.amount_a, snapshot.token_a.decimals)
    amount_b = parse_units(draft.amount_b, snapshot.token_b.decimals)
    check_deposit_units(amount_a, amount_b)
    data = PreflightResponse(amount_a=amount_a, amount_b=amount_b)
    return _respond(request, data.model_dump())


@router.post("/withdraw/preflight")
async def preflight_withdrawal(body: WithdrawQuoteRequest, request: Request) -> ApiResponse:
    """Run the withdrawal gate; return the LP units to burn."""
    snapshot = body.snapshot.to_domain()
    units = check_remove_amount(WithdrawalDraft(remove_amount=body.remove_amount))
    check_liquidity_sufficient(units, snapshot.user_liquidity)
    return _respond(request, PreflightResponse(lp_amount=units).model_dump())
