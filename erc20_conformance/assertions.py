from typing import Any, Awaitable, Iterable

from erc20_conformance.contract import (
    APPROVAL_EVENT,
    EVENT_ARGUMENTS,
    TRANSFER_EVENT,
    EventLog,
    Receipt,
)
from erc20_conformance.exceptions import (
    ConformanceFailure,
    EventMismatch,
    RevertNotReceived,
    UnexpectedError,
    ValueMismatch,
)

REVERT = ("revert",)
REVERT_OR_FAIL = ("revert", "invalid opcode")

# argument names used by common token implementations, mapped onto the
# names in EVENT_ARGUMENTS
_ARGUMENT_ALIASES = {
    "sender": "from",
    "src": "from",
    "receiver": "to",
    "dst": "to",
    "recipient": "to",
    "amount": "value",
    "wad": "value",
    "guy": "spender",
}


async def expect_error(awaitable: Awaitable, messages: Iterable[str]) -> Exception:
    """
    Await `awaitable` and check that it fails for an anticipated reason.

    The failure is classified by searching the error message for each of
    `messages`. Returns the caught exception.

    Raises
    ------
    RevertNotReceived
        If the call succeeds.
    UnexpectedError
        If the call fails but the message matches none of `messages`.
    """
    messages = tuple(messages)
    try:
        await awaitable
    except ConformanceFailure:
        # an assertion inside the awaited code, not a rejection
        raise
    except Exception as e:
        text = str(e)
        if any(m in text for m in messages):
            return e
        raise UnexpectedError(
            f"Expected revert, got '{type(e).__name__}: {text}' instead.",
            hint=f"accepted messages: {', '.join(repr(m) for m in messages)}",
        ) from e

    raise RevertNotReceived("Expected revert not received.")


async def expect_revert(awaitable: Awaitable) -> Exception:
    return await expect_error(awaitable, REVERT)


async def expect_revert_or_fail(awaitable: Awaitable) -> Exception:
    # some execution environments signal failed assertions with an invalid
    # opcode instead of a revert
    return await expect_error(awaitable, REVERT_OR_FAIL)


def _normalize_name(name: str) -> str:
    name = name.lstrip("_").lower()
    return _ARGUMENT_ALIASES.get(name, name)


def normalized_args(log: EventLog) -> tuple:
    """
    Return the arguments of `log` in standard order.

    Arguments are matched by (normalized) name when possible, and otherwise
    taken positionally in declaration order.
    """
    expected_names = EVENT_ARGUMENTS.get(log.event)
    values = list(log.args.values())
    if expected_names is None:
        return tuple(values)

    by_name = {_normalize_name(k): v for k, v in log.args.items()}
    if all(name in by_name for name in expected_names):
        return tuple(by_name[name] for name in expected_names)
    return tuple(values)


def assert_event(receipt: Receipt, name: str, *expected: Any) -> EventLog:
    """
    Assert `receipt` holds exactly one `name` event with arguments `expected`.

    Addresses and amounts are compared with ==; python ints are arbitrary
    precision so amounts above 2**64 compare exactly.
    """
    logs = receipt.events_named(name)
    if len(logs) != 1:
        emitted = [log.event for log in receipt.logs]
        raise EventMismatch(f"expected exactly one {name} event, got {len(logs)}: {emitted}")

    log = logs[0]
    actual = normalized_args(log)
    if actual != tuple(expected):
        arg_names = EVENT_ARGUMENTS.get(name, ())
        raise EventMismatch(
            f"{name} event mismatch: expected {_fmt(arg_names, expected)}, "
            f"got {_fmt(arg_names, actual)}"
        )
    return log


def _fmt(names, values) -> str:
    if len(names) != len(values):
        return repr(tuple(values))
    return "(" + ", ".join(f"{n}={v!r}" for n, v in zip(names, values)) + ")"


def assert_transfer_event(receipt: Receipt, _from, _to, value: int) -> EventLog:
    return assert_event(receipt, TRANSFER_EVENT, _from, _to, value)


def assert_approval_event(receipt: Receipt, owner, spender, value: int) -> EventLog:
    return assert_event(receipt, APPROVAL_EVENT, owner, spender, value)


def assert_equal(actual: Any, expected: Any, what: str) -> None:
    # not a bare assert, which `python -O` strips
    if actual != expected:
        raise ValueMismatch(f"{what}: expected {expected!r}, got {actual!r}")


def assert_amount(actual: Any, expected: int, what: str) -> None:
    assert_equal(actual, expected, what)


def assert_true(result: Any, what: str) -> None:
    # `is True`, a truthy non-bool return is not ERC-20 conformant
    if result is not True:
        raise ValueMismatch(f"{what}: expected True, got {result!r}")
