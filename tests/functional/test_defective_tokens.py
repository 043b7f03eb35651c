"""
Tokens with known defects must fail the scenarios that target them, and
only those.
"""
import subprocess
import sys
import textwrap
from pathlib import Path

import pytest

from erc20_conformance import ReferenceToken, Revert
from erc20_conformance.contract import TRANSFER_EVENT
from erc20_conformance.exceptions import EventMismatch, RevertNotReceived, UnexpectedError
from erc20_conformance.reference import mutating


class AdditiveApprove(ReferenceToken):
    def _do_approve(self, owner, spender, value):
        current = self.allowances.get((owner, spender), 0)
        super()._do_approve(owner, spender, current + value)


class SilentWhenUnchanged(ReferenceToken):
    def _do_approve(self, owner, spender, value):
        if self.allowances.get((owner, spender), 0) == value:
            return
        super()._do_approve(owner, spender, value)


class StaleRecipientBalance(ReferenceToken):
    def _do_transfer(self, _from, to, value):
        from_balance = self.balances.get(_from, 0)
        to_balance = self.balances.get(to, 0)
        if from_balance < value:
            raise Revert("insufficient balance")
        self.balances[_from] = from_balance - value
        self.balances[to] = to_balance + value
        self._log(TRANSFER_EVENT, **{"from": _from, "to": to, "value": value})


class NoEventForZero(ReferenceToken):
    def _do_transfer(self, _from, to, value):
        if value == 0:
            return
        super()._do_transfer(_from, to, value)


class ResettingAllowance(ReferenceToken):
    def _spend_allowance(self, owner, spender, value):
        super()._spend_allowance(owner, spender, value)
        self.allowances[(owner, spender)] = 0


class StrictDecrease(ReferenceToken):
    @mutating
    def decreaseApproval(self, spender, subtracted_value, *, sender):
        current = self.allowances.get((sender, spender), 0)
        if subtracted_value > current:
            raise Revert("allowance underflow")
        self._do_approve(sender, spender, current - subtracted_value)
        return True


class ReturnsFalse(ReferenceToken):
    @mutating
    def transfer(self, to, value, *, sender):
        if self.balances.get(sender, 0) < value:
            return False
        self._do_transfer(sender, to, value)
        return True


class TruthyApprove(ReferenceToken):
    @mutating
    def approve(self, spender, value, *, sender):
        self._do_approve(sender, spender, value)
        return 1


class ArithmeticFailure(ReferenceToken):
    def _do_transfer(self, _from, to, value):
        if self.balances.get(_from, 0) < value:
            raise ArithmeticError("underflow")
        super()._do_transfer(_from, to, value)


class LeakyMint(ReferenceToken):
    def _mint(self, to, value):
        super()._mint(to, value)
        # an extra copy for the owner, not reflected in the supply
        self.balances[self.owner] = self.balances.get(self.owner, 0) + value


class SelfSpendWithoutAllowance(ReferenceToken):
    def _spend_allowance(self, owner, spender, value):
        if owner == spender:
            return
        super()._spend_allowance(owner, spender, value)


def test_additive_approve(run, scenario_failed):
    with scenario_failed(exc_text="allowance: expected 2, got 7"):
        run("approve.overwrites_allowance[spender_ne_sender]", AdditiveApprove)

    run("approve.returns_true_approving[spender_ne_sender]", AdditiveApprove)


def test_approval_event_when_unchanged(run, scenario_failed):
    with scenario_failed(EventMismatch, "expected exactly one Approval event, got 0"):
        run("approve.fires_approval_when_unchanged[spender_eq_sender]", SilentWhenUnchanged)

    run("approve.fires_approval[spender_eq_sender]", SilentWhenUnchanged)


def test_self_transfer_creates_tokens(run, scenario_failed):
    with scenario_failed(exc_text="balanceOf(sender): expected 3, got 4"):
        run("transfer.updates_balances[to_eq_sender]", StaleRecipientBalance)

    run("transfer.updates_balances[to_ne_sender]", StaleRecipientBalance)


def test_self_transfer_from_creates_tokens(run, scenario_failed):
    with scenario_failed(exc_text="balanceOf(_from)"):
        run("transferFrom.updates_balances[to_eq_from]", StaleRecipientBalance)

    run("transferFrom.updates_balances[distinct]", StaleRecipientBalance)


@pytest.mark.parametrize("variant", ["to_ne_sender", "to_eq_sender"])
def test_no_event_for_zero(run, scenario_failed, variant):
    with scenario_failed(EventMismatch, "expected exactly one Transfer event, got 0"):
        run(f"transfer.fires_transfer_for_zero[{variant}]", NoEventForZero)

    run(f"transfer.fires_transfer[{variant}]", NoEventForZero)


def test_allowance_reset_by_transfer_from(run, scenario_failed):
    with scenario_failed(exc_text="allowance: expected 1, got 0"):
        run("transferFrom.debits_allowance[distinct]", ResettingAllowance)

    run("transferFrom.fires_transfer[distinct]", ResettingAllowance)


def test_strict_decrease(run, scenario_failed):
    # the token's rejection propagates unchanged
    with scenario_failed(Revert, "allowance underflow"):
        run(
            "decreaseApproval.decrease_clamps[spender_ne_sender]",
            StrictDecrease,
            increase_decrease_approval=True,
        )

    run(
        "decreaseApproval.decrease_subtracts[spender_ne_sender]",
        StrictDecrease,
        increase_decrease_approval=True,
    )


def test_returns_false_instead_of_reverting(run, scenario_failed):
    with scenario_failed(RevertNotReceived, "Expected revert not received."):
        run("transfer.reverts_with_nothing[to_ne_sender]", ReturnsFalse)

    run("transfer.returns_true_when_possible[to_ne_sender]", ReturnsFalse)


def test_truthy_return_value(run, scenario_failed):
    with scenario_failed(exc_text="approve(3): expected True, got 1"):
        run("approve.returns_true_approving[spender_ne_sender]", TruthyApprove)

    run("approve.updates_allowance[spender_ne_sender]", TruthyApprove)


def test_unexpected_error(run, scenario_failed):
    with scenario_failed(UnexpectedError, "got 'ArithmeticError: underflow' instead"):
        run("transfer.reverts_with_nothing[to_ne_sender]", ArithmeticFailure)


def test_configured_revert_messages(run):
    run(
        "transfer.reverts_with_nothing[to_ne_sender]",
        ArithmeticFailure,
        revert_messages=("revert", "underflow"),
    )


def test_leaky_mint(run, scenario_failed):
    with scenario_failed(exc_text="sum of balances: expected 2, got 4"):
        run("supply.balances_sum_to_supply", LeakyMint)

    # the supply itself is right, only the owner holds extra tokens
    run("totalSupply.supply_after_credits", LeakyMint)
    run("supply.transfers_conserve", LeakyMint)


def test_self_spend_requires_allowance(run, scenario_failed):
    with scenario_failed(RevertNotReceived):
        run("transferFrom.reverts_without_allowance[spender_eq_from]", SelfSpendWithoutAllowance)

    with scenario_failed(exc_text="allowance: expected 1, got 3"):
        run("transferFrom.debits_allowance[spender_eq_from]", SelfSpendWithoutAllowance)

    run("transferFrom.reverts_without_allowance[distinct]", SelfSpendWithoutAllowance)
    run("transferFrom.spender_balance_unaffected[spender_eq_from]", ReferenceToken)


OPTIMIZED_RUN = textwrap.dedent(
    """
    from erc20_conformance import ReferenceToken, SuiteConfig
    from erc20_conformance.exceptions import ValueMismatch
    from erc20_conformance.reference import mint
    from erc20_conformance.runner import get_scenario, run_scenario

    class AdditiveApprove(ReferenceToken):
        def _do_approve(self, owner, spender, value):
            current = self.allowances.get((owner, spender), 0)
            super()._do_approve(owner, spender, current + value)

    accounts = ["0x%040x" % i for i in range(1, 5)]
    config = SuiteConfig(
        accounts=accounts, token=lambda: AdditiveApprove(owner=accounts[0]), mint=mint
    )
    try:
        run_scenario(config, get_scenario("approve.overwrites_allowance[spender_ne_sender]"))
    except ValueMismatch as e:
        print(e)
    else:
        raise SystemExit("defect missed")
    """
)


def test_checks_survive_optimized_mode():
    root = Path(__file__).resolve().parents[2]
    result = subprocess.run(
        [sys.executable, "-O", "-c", OPTIMIZED_RUN],
        cwd=root,
        capture_output=True,
        text=True,
        check=False,
    )
    assert result.returncode == 0, result.stderr
    assert "allowance: expected 2, got 7" in result.stdout
