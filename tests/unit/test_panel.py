"""Tests for derive_panel — the values handed to the rendering layer."""

import pytest

from src.lq_common.enums import LiquidityAction
from src.lq_pool.domain.models import DepositDraft, WithdrawalDraft
from src.lq_pool.domain.panel import PanelView, derive_panel, revalidate
from tests.factories import ONE_A, ONE_B, empty_pool_snapshot, make_snapshot


class TestEmptyDrafts:
    def test_pool_stats(self) -> None:
        view = derive_panel(make_snapshot(), DepositDraft(), WithdrawalDraft())
        assert view.first_deposit is False
        assert view.ratio == pytest.approx(50.0)
        assert view.ratio_display == "1 TKA = 50.000000 USDC"
        assert view.reserve_a_display == "100.0000"
        assert view.reserve_b_display == "5000.0000"
        assert view.balance_a_display == "1000.0000"
        assert view.lp_balance_display == "10.0000"
        assert view.share_display == "10.00%"
        assert view.deposit_label == "Add Liquidity"

    def test_controls(self) -> None:
        view = derive_panel(make_snapshot(), DepositDraft(), WithdrawalDraft())
        assert view.approved_a is True
        assert view.approved_b is True
        assert view.can_approve_a is False
        assert view.can_deposit is False
        assert view.can_remove is False
        assert view.expected_a_display == "0.0"


class TestDepositControls:
    def test_matching_pair_with_allowances_can_deposit(self) -> None:
        snap = make_snapshot(allowance_a=ONE_A, allowance_b=50 * ONE_B)
        view = derive_panel(snap, DepositDraft("1", "50"), WithdrawalDraft())
        assert view.ratio_error == ""
        assert view.can_deposit is True

    def test_missing_allowance_offers_approve(self) -> None:
        snap = make_snapshot(allowance_b=50 * ONE_B)
        view = derive_panel(snap, DepositDraft("1", "50"), WithdrawalDraft())
        assert view.approved_a is False
        assert view.can_approve_a is True
        assert view.can_approve_b is False
        assert view.can_deposit is False

    def test_mismatched_pair_blocks_deposit(self) -> None:
        snap = make_snapshot(allowance_a=ONE_A, allowance_b=50 * ONE_B)
        view = derive_panel(snap, DepositDraft("1", "40"), WithdrawalDraft())
        assert view.ratio_error.startswith("Ratio mismatch!")
        assert view.can_deposit is False

    def test_first_deposit_any_pair(self) -> None:
        snap = empty_pool_snapshot(allowance_a=ONE_A, allowance_b=999 * ONE_B)
        view = derive_panel(snap, DepositDraft("1", "999"), WithdrawalDraft())
        assert view.first_deposit is True
        assert view.deposit_label == "Create Pool"
        assert view.ratio_error == ""
        assert view.ratio_display == ""
        assert view.can_deposit is True

    def test_stale_diagnostic_is_rederived(self) -> None:
        view = derive_panel(
            make_snapshot(), DepositDraft("1", "50", ratio_error="stale"), WithdrawalDraft()
        )
        assert view.ratio_error == ""


class TestWithdrawalQuote:
    def test_expected_payout(self) -> None:
        # 1 of 100 LP on a 100 TKA / 5000 USDC pool
        view = derive_panel(make_snapshot(), DepositDraft(), WithdrawalDraft("1"))
        assert view.payout.expected_a == ONE_A
        assert view.payout.expected_b == 50 * ONE_B
        assert view.expected_a_display == "1.0000"
        assert view.expected_b_display == "50.0000"
        assert view.can_remove is True


class TestRevalidate:
    def test_sets_diagnostic(self) -> None:
        draft = revalidate(DepositDraft("1", "40"), make_snapshot())
        assert draft.ratio_error != ""
        assert draft.amount_b == "40"


class TestSubUnitAmounts:
    def test_deposit_rounding_to_zero_units_blocked(self) -> None:
        snap = empty_pool_snapshot(allowance_a=ONE_A, allowance_b=ONE_B)
        view = derive_panel(snap, DepositDraft("0.0000001", "0.0000001"), WithdrawalDraft())
        assert view.can_deposit is False

    def test_remove_rounding_to_zero_lp_units_blocked(self) -> None:
        view = derive_panel(make_snapshot(), DepositDraft(), WithdrawalDraft("0.0000000000000000001"))
        assert view.can_remove is False


class TestInFlight:
    def _controls(self, *actions: LiquidityAction) -> PanelView:
        snap = make_snapshot()
        return derive_panel(
            snap, DepositDraft("1", "50"), WithdrawalDraft("1"), frozenset(actions)
        )

    def test_nothing_pending(self) -> None:
        view = self._controls()
        assert view.can_approve_a is True
        assert view.can_approve_b is True
        assert view.can_remove is True

    def test_pending_approval_disables_only_its_control(self) -> None:
        view = self._controls(LiquidityAction.APPROVE_A)
        assert view.can_approve_a is False
        assert view.can_approve_b is True
        assert view.can_remove is True

    def test_pending_removal(self) -> None:
        view = self._controls(LiquidityAction.REMOVE_LIQUIDITY)
        assert view.can_remove is False

    def test_pending_deposit(self) -> None:
        snap = make_snapshot(allowance_a=ONE_A, allowance_b=50 * ONE_B)
        view = derive_panel(
            snap,
            DepositDraft("1", "50"),
            WithdrawalDraft(),
            frozenset({LiquidityAction.ADD_LIQUIDITY}),
        )
        assert view.can_deposit is False
