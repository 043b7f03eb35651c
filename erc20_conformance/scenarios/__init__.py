"""
The scenario catalog.

Scenarios are coroutines taking a `ScenarioContext` and a namespace of
resolved role accounts. They are registered with the `scenario` decorator,
once per role variant, so that each behaviour is exercised both with
distinct accounts and with aliased ones (e.g. a sender transferring to
itself).
"""
from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import Awaitable, Callable, Optional

from erc20_conformance.config import SuiteConfig
from erc20_conformance.fixture import ScenarioContext

ScenarioFn = Callable[[ScenarioContext, SimpleNamespace], Awaitable[None]]


@dataclass(frozen=True)
class Variant:
    """A binding of scenario roles to named participants."""

    slug: str
    description: str
    roles: tuple = ()

    @classmethod
    def of(cls, slug, description, **roles):
        return cls(slug, description, tuple(roles.items()))

    def resolve(self, ctx: ScenarioContext) -> SimpleNamespace:
        return ctx.roles(**dict(self.roles))


NO_ROLES = Variant("", "")

APPROVE_VARIANTS = (
    Variant.of("spender_ne_sender", "_spender != sender", owner="alice", spender="bob"),
    Variant.of("spender_eq_sender", "_spender == sender", owner="alice", spender="alice"),
)

TRANSFER_VARIANTS = (
    Variant.of("to_ne_sender", "_to != sender", sender="alice", to="bob"),
    Variant.of("to_eq_sender", "_to == sender", sender="alice", to="alice"),
)

TRANSFER_FROM_VARIANTS = (
    Variant.of("distinct", "all roles distinct", owner="alice", spender="bob", to="charles"),
    Variant.of("to_eq_spender", "_to == spender", owner="alice", spender="bob", to="bob"),
    Variant.of("to_eq_from", "_to == _from", owner="alice", spender="bob", to="alice"),
    Variant.of(
        "spender_eq_from", "spender == _from", owner="alice", spender="alice", to="bob"
    ),
)


@dataclass(frozen=True)
class Scenario:
    operation: str
    title: str
    fn: ScenarioFn = field(compare=False)
    variant: Variant = NO_ROLES
    requires: Optional[Callable[[SuiteConfig], bool]] = field(default=None, compare=False)

    @property
    def id(self) -> str:
        ret = f"{self.operation}.{self.fn.__name__}"
        if self.variant.slug:
            ret += f"[{self.variant.slug}]"
        return ret

    @property
    def description(self) -> str:
        ret = f"{self.operation}: {self.title}"
        if self.variant.description:
            ret += f" (when {self.variant.description})"
        return ret

    def applies_to(self, config: SuiteConfig) -> bool:
        return self.requires is None or bool(self.requires(config))

    async def run(self, ctx: ScenarioContext) -> None:
        await self.fn(ctx, self.variant.resolve(ctx))


# in registration order, which is also execution order
REGISTRY: list[Scenario] = []


def scenario(operation: str, title: str, variants=(NO_ROLES,), requires=None):
    """Register the decorated coroutine once per variant."""

    def decorator(fn: ScenarioFn) -> ScenarioFn:
        for variant in variants:
            s = Scenario(operation, title, fn, variant, requires)
            if any(other.id == s.id for other in REGISTRY):
                raise ValueError(f"duplicate scenario id: {s.id}")
            REGISTRY.append(s)
        return fn

    return decorator


def all_scenarios() -> list[Scenario]:
    return list(REGISTRY)


# importing the catalog modules registers their scenarios
from erc20_conformance.scenarios import (  # noqa: E402,F401
    total_supply,
    balance_of,
    allowance,
    approve,
    transfer,
    transfer_from,
    metadata,
    approval_extension,
    conservation,
)
