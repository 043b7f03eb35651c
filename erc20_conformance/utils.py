import inspect
from typing import Any

async def maybe_await(value: Any) -> Any:
    # callbacks may be plain functions or coroutine functions
    if inspect.isawaitable(value):
        return await value
    return value

def is_amount(value: Any) -> bool:
    # bool is an int subclass, but never a token amount
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0

def short_address(address: Any) -> str:
    s = str(address)
    if len(s) > 12:
        return f"{s[:6]}..{s[-4:]}"
    return s
