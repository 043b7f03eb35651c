import logging
from contextlib import contextmanager

import hypothesis
import pytest

from erc20_conformance import ReferenceToken, SuiteConfig
from erc20_conformance.reference import mint
from erc20_conformance.runner import get_scenario, run_scenario

############
# PATCHING #
############


# disable hypothesis deadline globally
hypothesis.settings.register_profile("ci", deadline=None)
hypothesis.settings.load_profile("ci")


OWNER = "0x" + "00" * 19 + "a0"
ALICE = "0x" + "00" * 19 + "a1"
BOB = "0x" + "00" * 19 + "a2"
CHARLES = "0x" + "00" * 19 + "a3"
DAVE = "0x" + "00" * 19 + "a4"


@pytest.fixture(scope="session")
def accounts():
    return (OWNER, ALICE, BOB, CHARLES, DAVE)


@pytest.fixture
def make_config(accounts):
    # builds a config for ReferenceToken (or a subclass of it)
    def fn(token_cls=ReferenceToken, **kwargs):
        kwargs.setdefault("accounts", accounts)
        if "token" not in kwargs:
            kwargs["token"] = lambda: token_cls(owner=accounts[0])
        if "transfer" not in kwargs:
            kwargs.setdefault("mint", mint)
        return SuiteConfig(**kwargs)

    return fn


@pytest.fixture
def run(make_config):
    """Run a single scenario, by id, against `token_cls`."""

    def fn(scenario_id, token_cls=ReferenceToken, **kwargs):
        config = make_config(token_cls, **kwargs)
        run_scenario(config, get_scenario(scenario_id))

    return fn


@pytest.fixture
def scenario_failed():
    @contextmanager
    def fn(exception=AssertionError, exc_text=None):
        with pytest.raises(exception) as excinfo:
            yield

        if exc_text:
            assert exc_text in str(excinfo.value), (exc_text, excinfo.value)

    return fn


@pytest.fixture
def debug_logs(caplog):
    caplog.set_level(logging.DEBUG, logger="erc20_conformance")
    return caplog
