import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from erc20_conformance import ReferenceToken, SuiteConfig
from erc20_conformance.exceptions import ConfigurationError
from erc20_conformance.reference import mint


def _token():
    return ReferenceToken()


def test_minimal_config(accounts):
    config = SuiteConfig(accounts=accounts, token=_token, mint=mint)

    assert config.credit_increases_supply
    assert config.credit is mint
    assert config.initial_supply == 0
    assert config.initial_balances == ()
    assert not config.increase_decrease_approval
    assert config.revert_messages == ("revert", "invalid opcode")


def test_transfer_credit(accounts):
    async def credit(token, to, amount):
        pass

    config = SuiteConfig(accounts=accounts, token=_token, transfer=credit)
    assert not config.credit_increases_supply
    assert config.credit is credit


def test_sequences_are_normalized(accounts):
    config = SuiteConfig(
        accounts=list(accounts),
        token=_token,
        mint=mint,
        initial_balances=[[accounts[0], 10]],
        initial_allowances=[[accounts[0], accounts[1], 5]],
        revert_messages="reverted",
    )
    assert config.accounts == accounts
    assert config.initial_balances == ((accounts[0], 10),)
    assert config.initial_allowances == ((accounts[0], accounts[1], 5),)
    assert config.revert_messages == ("reverted",)
    # frozen dataclass with tuple fields
    hash(config)


bad_kwargs = [
    ({"accounts": ()}, "at least one account"),
    ({"token": None}, "factory callable"),
    ({"mint": None}, "no crediting callback"),
    ({"transfer": mint}, "mutually exclusive"),
    ({"before_each": 1}, "`before_each` must be callable"),
    ({"initial_supply": -1}, "invalid initial supply"),
    ({"initial_supply": True}, "invalid initial supply"),
    ({"initial_balances": [("0x01",)]}, "invalid initial balance entry"),
    ({"initial_balances": [("0x01", 1.5)]}, "invalid initial balance entry"),
    ({"initial_allowances": [("0x01", "0x02")]}, "invalid initial allowance entry"),
    ({"decimals": -2}, "invalid expected decimals"),
    ({"revert_messages": ()}, "revert_messages must be non-empty strings"),
    ({"revert_messages": ("revert", "")}, "revert_messages must be non-empty strings"),
]


@pytest.mark.parametrize("kwargs,exc_text", bad_kwargs)
def test_invalid_config(accounts, kwargs, exc_text):
    options = {"accounts": accounts, "token": _token, "mint": mint}
    options.update(kwargs)

    with pytest.raises(ConfigurationError) as excinfo:
        SuiteConfig(**options)
    assert exc_text in str(excinfo.value)


def test_configuration_error_is_value_error(accounts):
    with pytest.raises(ValueError):
        SuiteConfig(accounts=accounts, token=_token)


def test_missing_credit_has_hint(accounts):
    with pytest.raises(ConfigurationError) as excinfo:
        SuiteConfig(accounts=accounts, token=_token)
    assert "hint" in str(excinfo.value)
    assert "`transfer`" in excinfo.value.hint


def test_unbalanced_initial_balances_warn(accounts, caplog):
    with caplog.at_level(logging.WARNING, logger="erc20_conformance"):
        config = SuiteConfig(
            accounts=accounts,
            token=_token,
            mint=mint,
            initial_supply=100,
            initial_balances=[(accounts[0], 60)],
        )

    assert not config.balances_cover_supply
    assert "initial balances sum to 60 but initial supply is 100" in caplog.text


def test_balances_cover_supply(accounts):
    config = SuiteConfig(
        accounts=accounts,
        token=_token,
        mint=mint,
        initial_supply=100,
        initial_balances=[(accounts[0], 60), (accounts[1], 40)],
    )
    assert config.balances_cover_supply


def test_zero_supply_without_balances_is_covered(accounts):
    config = SuiteConfig(accounts=accounts, token=_token, mint=mint)
    assert config.balances_cover_supply


def test_supply_without_balances_is_not_covered(accounts):
    config = SuiteConfig(accounts=accounts, token=_token, mint=mint, initial_supply=100)
    assert not config.balances_cover_supply


def test_resolved_config_is_logged(accounts, debug_logs):
    SuiteConfig(accounts=accounts, token=_token, mint=mint)
    assert "resolved suite config: 5 accounts" in debug_logs.text
    assert "credit by mint" in debug_logs.text


def test_from_options_aliases(accounts):
    def before(token):
        pass

    config = SuiteConfig.from_options(
        {
            "accounts": accounts,
            "token": _token,
            "purchase": mint,
            "initialSupply": 10,
            "initialBalances": [(accounts[0], 10)],
            "initialAllowances": [(accounts[0], accounts[1], 3)],
            "beforeEach": before,
            "increaseDecreaseApproval": True,
            "revertMessages": ["revert"],
            "decimals": 18,
        }
    )

    assert config.mint is mint
    assert config.initial_supply == 10
    assert config.initial_balances == ((accounts[0], 10),)
    assert config.initial_allowances == ((accounts[0], accounts[1], 3),)
    assert config.before_each is before
    assert config.increase_decrease_approval
    assert config.revert_messages == ("revert",)
    assert config.decimals == 18


def test_from_options_accepts_field_names(accounts):
    config = SuiteConfig.from_options(
        {"accounts": accounts, "token": _token, "mint": mint, "initial_supply": 0}
    )
    assert config.mint is mint


bad_options = [
    ({"totalSupply": 1}, "unknown suite option: 'totalSupply'"),
    ({"purchase": mint}, "suite option given twice: 'purchase'"),
]


@pytest.mark.parametrize("extra,exc_text", bad_options)
def test_from_options_rejects(accounts, extra, exc_text):
    options = {"accounts": accounts, "token": _token, "mint": mint}
    options.update(extra)

    with pytest.raises(ConfigurationError) as excinfo:
        SuiteConfig.from_options(options)
    assert exc_text in str(excinfo.value)


@pytest.mark.parametrize("missing", ["accounts", "token"])
def test_from_options_requires(accounts, missing):
    options = {"accounts": accounts, "token": _token, "mint": mint}
    del options[missing]

    with pytest.raises(ConfigurationError) as excinfo:
        SuiteConfig.from_options(options)
    assert f"missing required suite option: '{missing}'" in str(excinfo.value)


def test_participants(accounts):
    config = SuiteConfig(accounts=accounts, token=_token, mint=mint)
    assert config.participant("owner") == accounts[0]
    assert config.participant("alice") == accounts[1]
    assert config.participant("bob") == accounts[2]
    assert config.participant("charles") == accounts[3]


def test_unknown_role(accounts):
    config = SuiteConfig(accounts=accounts, token=_token, mint=mint)
    with pytest.raises(ConfigurationError, match="unknown role: 'dave'"):
        config.participant("dave")


def test_too_few_accounts(accounts):
    # a config with too few accounts is valid until a role is needed
    config = SuiteConfig(accounts=accounts[:3], token=_token, mint=mint)
    assert config.participant("bob") == accounts[2]

    with pytest.raises(ConfigurationError) as excinfo:
        config.participant("charles")
    assert "needs at least 4 accounts, only 3 configured" in str(excinfo.value)
    assert excinfo.value.hint is not None


@given(st.lists(st.integers(min_value=0, max_value=2**256), min_size=1, max_size=5))
def test_balances_cover_supply_property(amounts):
    accounts = [f"0x{i:040x}" for i in range(len(amounts))]
    config = SuiteConfig(
        accounts=accounts,
        token=_token,
        mint=mint,
        initial_supply=sum(amounts),
        initial_balances=list(zip(accounts, amounts)),
    )
    assert config.balances_cover_supply
