import logging
from contextlib import asynccontextmanager
from types import SimpleNamespace
from typing import Any, AsyncIterator, Awaitable, Iterable

from erc20_conformance.assertions import expect_error
from erc20_conformance.config import SuiteConfig
from erc20_conformance.utils import maybe_await, short_address

logger = logging.getLogger(__name__)


class ScenarioContext:
    """
    Per-scenario state: the fresh token instance and everything derived
    from it. Never shared between scenarios.
    """

    def __init__(self, config: SuiteConfig, token: Any, decimals: int):
        self.config = config
        self.token = token
        self.decimals = decimals

    def __repr__(self):
        return f"<ScenarioContext token={self.token!r} decimals={self.decimals}>"

    @property
    def credit_increases_supply(self) -> bool:
        return self.config.credit_increases_supply

    def units(self, amount: int) -> int:
        """Scale a whole-token amount into base units."""
        return amount * 10**self.decimals

    def account(self, role: str):
        return self.config.participant(role)

    def roles(self, **mapping: str) -> SimpleNamespace:
        """
        Resolve role names into accounts, e.g.
        `ctx.roles(sender="alice", to="bob")` -> namespace(sender=.., to=..)
        """
        return SimpleNamespace(**{k: self.account(v) for k, v in mapping.items()})

    async def credit(self, to, amount: int) -> None:
        """Fund `to` with `amount` base units using the configured callback."""
        logger.debug("credit %s with %s", short_address(to), amount)
        await maybe_await(self.config.credit(self.token, to, amount))

    async def assert_reverts(self, awaitable: Awaitable) -> Exception:
        return await expect_error(awaitable, self.config.revert_messages)

    async def balances(self, accounts: Iterable) -> dict:
        # calls into the token never overlap
        result = {}
        for account in accounts:
            if account not in result:
                result[account] = await self.token.balanceOf(account)
        return result

    async def allowances(self, pairs: Iterable[tuple]) -> dict:
        result = {}
        for owner, spender in pairs:
            if (owner, spender) not in result:
                result[(owner, spender)] = await self.token.allowance(owner, spender)
        return result


async def _resolve_decimals(token: Any) -> int:
    getter = getattr(token, "decimals", None)
    if getter is None:
        return 0
    return int(await maybe_await(getter()))


@asynccontextmanager
async def open_scenario(config: SuiteConfig) -> AsyncIterator[ScenarioContext]:
    """
    Create a fresh token for one scenario, run the setup hook, and run the
    teardown hook on exit once the token exists, even if setup failed.

    Any failure here fails the current scenario only.
    """
    token = await maybe_await(config.token())
    logger.debug("created token %r", token)

    try:
        decimals = await _resolve_decimals(token)
        if config.before_each is not None:
            logger.debug("running before_each hook")
            await maybe_await(config.before_each(token))

        yield ScenarioContext(config, token, decimals)
    finally:
        if config.after_each is not None:
            logger.debug("running after_each hook")
            await maybe_await(config.after_each(token))
