"""
The interface the suite expects a token under test to expose.

Read-only operations are coroutines returning python ints (or strings for
the metadata getters). State-changing operations are exposed as
`MutatingMethod` objects with two access modes:

    await token.transfer.call(bob, 1, sender=alice)      # simulate -> bool
    await token.transfer.transact(bob, 1, sender=alice)  # commit -> Receipt

A simulated call never changes state. A committed call either succeeds and
returns a `Receipt`, or raises (the execution environment rejected it).
"""
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

MAX_UINT256 = 2**256 - 1

TRANSFER_EVENT = "Transfer"
APPROVAL_EVENT = "Approval"

# standard argument order of the two ERC-20 events
EVENT_ARGUMENTS = {
    TRANSFER_EVENT: ("from", "to", "value"),
    APPROVAL_EVENT: ("owner", "spender", "value"),
}


@dataclass
class EventLog:
    """A decoded event emitted by a committed call."""

    event: str
    args: dict[str, Any]


@dataclass
class Receipt:
    """Result of a committed call."""

    logs: list[EventLog] = field(default_factory=list)
    tx_hash: Any = None

    def events_named(self, name: str) -> list[EventLog]:
        return [log for log in self.logs if log.event == name]


@runtime_checkable
class MutatingMethod(Protocol):
    async def call(self, *args, sender) -> bool:
        ...

    async def transact(self, *args, sender) -> Receipt:
        ...


@runtime_checkable
class TokenContract(Protocol):
    approve: MutatingMethod
    transfer: MutatingMethod
    transferFrom: MutatingMethod

    async def totalSupply(self) -> int:
        ...

    async def balanceOf(self, owner) -> int:
        ...

    async def allowance(self, owner, spender) -> int:
        ...
