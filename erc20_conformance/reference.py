"""
An in-memory ERC-20 token implementing the interface the suite expects.

It models the behaviour the suite checks for: approvals overwrite, every
state-changing call emits its event (even for zero or unchanged values),
insufficient balance or allowance reverts, increaseApproval reverts on
overflow and decreaseApproval clamps at zero.

Subclasses may override `_do_approve`, `_do_transfer` and `_spend_allowance`
to model other (including broken) implementations.
"""
import copy
from contextlib import contextmanager
from typing import Any, Callable, Optional

from erc20_conformance.contract import (
    APPROVAL_EVENT,
    MAX_UINT256,
    TRANSFER_EVENT,
    EventLog,
    Receipt,
)
from erc20_conformance.exceptions import Revert


class _BoundMutation:
    """A state-changing token method, bound to a token instance."""

    def __init__(self, token: "ReferenceToken", fn: Callable, name: str):
        self._token = token
        self._fn = fn
        self.name = name

    def __repr__(self):
        return f"<{type(self._token).__name__}.{self.name}>"

    async def call(self, *args, sender) -> Any:
        with self._token.anchor():
            return self._execute(args, sender)[0]

    async def transact(self, *args, sender) -> Receipt:
        snapshot = self._token.snapshot()
        try:
            _, logs = self._execute(args, sender)
        except Exception:
            self._token.revert_to(snapshot)
            raise
        self._token.tx_count += 1
        return Receipt(logs=logs, tx_hash=self._token.tx_count)

    def _execute(self, args, sender):
        token = self._token
        token._pending_logs = []
        try:
            result = self._fn(token, *args, sender=sender)
            return result, token._pending_logs
        finally:
            token._pending_logs = None


class mutating:
    """Decorator exposing a method as a `call`/`transact` pair."""

    def __init__(self, fn: Callable):
        self._fn = fn
        self._name = fn.__name__

    def __set_name__(self, owner, name):
        self._name = name

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        return _BoundMutation(obj, self._fn, self._name)


class ReferenceToken:
    def __init__(
        self,
        owner: Any = None,
        initial_supply: int = 0,
        name: Optional[str] = None,
        symbol: Optional[str] = None,
        decimals: Optional[int] = None,
    ):
        self.owner = owner
        self._name = name
        self._symbol = symbol
        self._decimals = decimals

        self.balances: dict = {}
        self.allowances: dict = {}
        self.total_supply = 0
        self.tx_count = 0
        self._pending_logs: Optional[list] = None

        if initial_supply:
            if owner is None:
                raise ValueError("an owner is required to hold the initial supply")
            self._mint(owner, initial_supply)

    def __repr__(self):
        return f"<{type(self).__name__} supply={self.total_supply}>"

    # state management

    def snapshot(self) -> tuple:
        return (copy.copy(self.balances), copy.copy(self.allowances), self.total_supply)

    def revert_to(self, snapshot: tuple) -> None:
        balances, allowances, total_supply = snapshot
        self.balances = copy.copy(balances)
        self.allowances = copy.copy(allowances)
        self.total_supply = total_supply

    @contextmanager
    def anchor(self):
        # discard every state change made inside the block
        snapshot = self.snapshot()
        try:
            yield
        finally:
            self.revert_to(snapshot)

    def _log(self, event: str, **args) -> None:
        # no pending call while minting the initial supply in __init__
        if self._pending_logs is not None:
            self._pending_logs.append(EventLog(event, args))

    @staticmethod
    def _check_amount(value: int) -> None:
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"amount must be an int, got {type(value).__name__}")
        if not 0 <= value <= MAX_UINT256:
            raise Revert(f"amount out of range: {value}")

    # read-only interface

    async def totalSupply(self) -> int:
        return self.total_supply

    async def balanceOf(self, owner) -> int:
        return self.balances.get(owner, 0)

    async def allowance(self, owner, spender) -> int:
        return self.allowances.get((owner, spender), 0)

    async def name(self) -> Optional[str]:
        return self._name

    async def symbol(self) -> Optional[str]:
        return self._symbol

    async def decimals(self) -> int:
        return self._decimals or 0

    # state-changing interface

    @mutating
    def approve(self, spender, value, *, sender):
        self._check_amount(value)
        self._do_approve(sender, spender, value)
        return True

    @mutating
    def transfer(self, to, value, *, sender):
        self._check_amount(value)
        self._do_transfer(sender, to, value)
        return True

    @mutating
    def transferFrom(self, _from, to, value, *, sender):
        self._check_amount(value)
        self._spend_allowance(_from, sender, value)
        self._do_transfer(_from, to, value)
        return True

    @mutating
    def increaseApproval(self, spender, added_value, *, sender):
        self._check_amount(added_value)
        current = self.allowances.get((sender, spender), 0)
        if current + added_value > MAX_UINT256:
            raise Revert("allowance overflow")
        self._do_approve(sender, spender, current + added_value)
        return True

    @mutating
    def decreaseApproval(self, spender, subtracted_value, *, sender):
        self._check_amount(subtracted_value)
        current = self.allowances.get((sender, spender), 0)
        self._do_approve(sender, spender, max(current - subtracted_value, 0))
        return True

    @mutating
    def mint(self, to, value, *, sender):
        if self.owner is not None and sender != self.owner:
            raise Revert("only the owner can mint")
        self._check_amount(value)
        self._mint(to, value)
        return True

    # internals

    def _mint(self, to, value: int) -> None:
        if self.total_supply + value > MAX_UINT256:
            raise Revert("total supply overflow")
        self.total_supply += value
        self.balances[to] = self.balances.get(to, 0) + value
        self._log(TRANSFER_EVENT, **{"from": None, "to": to, "value": value})

    def _spend_allowance(self, owner, spender, value: int) -> None:
        current = self.allowances.get((owner, spender), 0)
        if current < value:
            raise Revert("insufficient allowance")
        self.allowances[(owner, spender)] = current - value

    def _do_approve(self, owner, spender, value: int) -> None:
        self.allowances[(owner, spender)] = value
        self._log(APPROVAL_EVENT, owner=owner, spender=spender, value=value)

    def _do_transfer(self, _from, to, value: int) -> None:
        balance = self.balances.get(_from, 0)
        if balance < value:
            raise Revert("insufficient balance")
        # debit before reading the recipient so that self transfers net to zero
        self.balances[_from] = balance - value
        self.balances[to] = self.balances.get(to, 0) + value
        self._log(TRANSFER_EVENT, **{"from": _from, "to": to, "value": value})


async def mint(token: ReferenceToken, to, amount: int) -> None:
    """`SuiteConfig.mint` callback for ReferenceToken."""
    await token.mint.transact(to, amount, sender=token.owner)
