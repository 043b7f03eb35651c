import asyncio
import logging
from typing import Iterator, Optional

from erc20_conformance.config import SuiteConfig
from erc20_conformance.fixture import open_scenario
from erc20_conformance.scenarios import Scenario, all_scenarios

logger = logging.getLogger(__name__)


def collect_scenarios(config: SuiteConfig, operation: Optional[str] = None) -> Iterator[Scenario]:
    """
    Yield the scenarios that apply to `config`, in catalog order.

    Scenarios whose expectation is not configured (e.g. `name` with no
    expected name) are left out entirely rather than reported as skipped.
    """
    for s in all_scenarios():
        if operation is not None and s.operation != operation:
            continue
        if s.applies_to(config):
            yield s


def get_scenario(scenario_id: str) -> Scenario:
    for s in all_scenarios():
        if s.id == scenario_id:
            return s
    raise KeyError(f"no such scenario: {scenario_id}")


async def run_scenario_async(config: SuiteConfig, scenario: Scenario) -> None:
    logger.debug("running %s", scenario.description)
    async with open_scenario(config) as ctx:
        await scenario.run(ctx)


def run_scenario(config: SuiteConfig, scenario: Scenario) -> None:
    """
    Run one scenario against a fresh token, in a fresh event loop.

    Exceptions propagate unchanged: AssertionError subclasses for
    conformance failures, ConfigurationError for config problems, and
    whatever the token raised for anything unexpected.
    """
    asyncio.run(run_scenario_async(config, scenario))
