from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _version

from erc20_conformance.assertions import (
    assert_approval_event,
    assert_event,
    assert_transfer_event,
    expect_revert,
    expect_revert_or_fail,
)
from erc20_conformance.config import SuiteConfig
from erc20_conformance.contract import MAX_UINT256, EventLog, Receipt, TokenContract
from erc20_conformance.exceptions import ConfigurationError, Revert
from erc20_conformance.reference import ReferenceToken
from erc20_conformance.runner import collect_scenarios, run_scenario
from erc20_conformance.suite import ERC20Suite, suite

__version__: str
try:
    __version__ = _version("erc20-conformance")
except PackageNotFoundError:
    __version__ = "0.0.0"
