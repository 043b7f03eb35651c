"""
pytest integration.

Subclass `ERC20Suite` with a `config` attribute, or bind the result of
`suite()` to a `Test*` name in a test module:

    TestMyToken = suite(SuiteConfig(accounts=..., token=deploy, mint=mint))

Every applicable scenario becomes one parametrized `test_scenario` case,
identified as `<operation>.<scenario>[<variant>]`.
"""
from typing import Any, Mapping, Union

from erc20_conformance import settings
from erc20_conformance.config import SuiteConfig
from erc20_conformance.exceptions import ConfigurationError
from erc20_conformance.runner import collect_scenarios, run_scenario
from erc20_conformance.scenarios import Scenario

settings.configure_logging()


class ERC20Suite:
    """Base class for token conformance test classes."""

    config: SuiteConfig = None  # type: ignore[assignment]

    # pytest calls this for every test method of the class
    def pytest_generate_tests(self, metafunc):
        if "scenario" not in metafunc.fixturenames:
            return

        config = type(self).config
        if not isinstance(config, SuiteConfig):
            raise ConfigurationError(
                f"{type(self).__name__}.config must be a SuiteConfig, got {type(config).__name__}"
            )

        scenarios = list(collect_scenarios(config))
        metafunc.parametrize("scenario", scenarios, ids=[s.id for s in scenarios])

    def test_scenario(self, scenario: Scenario):
        run_scenario(type(self).config, scenario)


def suite(
    config: Union[SuiteConfig, Mapping[str, Any]], name: str = "TestERC20"
) -> type:
    """
    Return a new ERC20Suite subclass bound to `config`.

    `config` may also be an options mapping, see SuiteConfig.from_options.
    """
    if not isinstance(config, SuiteConfig):
        config = SuiteConfig.from_options(config)
    return type(name, (ERC20Suite,), {"config": config})
