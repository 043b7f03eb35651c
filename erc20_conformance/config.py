import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from erc20_conformance import settings
from erc20_conformance.exceptions import ConfigurationError
from erc20_conformance.utils import is_amount

logger = logging.getLogger(__name__)

# index into `accounts` for each named role
ROLES = {"owner": 0, "alice": 1, "bob": 2, "charles": 3}

# camelCase option names accepted by `SuiteConfig.from_options`
OPTION_ALIASES = {
    "initialSupply": "initial_supply",
    "initialBalances": "initial_balances",
    "initialAllowances": "initial_allowances",
    "purchase": "mint",
    "beforeEach": "before_each",
    "afterEach": "after_each",
    "increaseDecreaseApproval": "increase_decrease_approval",
    "revertMessages": "revert_messages",
}


@dataclass(frozen=True)
class SuiteConfig:
    """
    Everything the suite needs to know about the token under test.

    Exactly one of `mint` and `transfer` must be given. Both are called as
    `callback(token, to, amount)` and are used to credit test accounts:
    `mint` creates new tokens (total supply grows), `transfer` moves existing
    ones (total supply is unchanged).

    Any callback may be a coroutine function.
    """

    accounts: tuple
    token: Callable[[], Any]
    mint: Optional[Callable[[Any, Any, int], Any]] = None
    transfer: Optional[Callable[[Any, Any, int], Any]] = None
    initial_supply: int = 0
    initial_balances: tuple = ()
    initial_allowances: tuple = ()
    name: Optional[str] = None
    symbol: Optional[str] = None
    decimals: Optional[int] = None
    increase_decrease_approval: bool = False
    before_each: Optional[Callable[[Any], Any]] = None
    after_each: Optional[Callable[[Any], Any]] = None
    revert_messages: tuple = settings.REVERT_MESSAGES

    def __post_init__(self):
        # normalize sequences so the config stays hashable and immutable
        object.__setattr__(self, "accounts", tuple(self.accounts))
        object.__setattr__(
            self, "initial_balances", tuple(tuple(b) for b in self.initial_balances)
        )
        object.__setattr__(
            self, "initial_allowances", tuple(tuple(a) for a in self.initial_allowances)
        )
        if isinstance(self.revert_messages, str):
            object.__setattr__(self, "revert_messages", (self.revert_messages,))
        else:
            object.__setattr__(self, "revert_messages", tuple(self.revert_messages))

        self._validate()

        logger.debug(
            "resolved suite config: %d accounts, initial supply %s, credit by %s",
            len(self.accounts),
            self.initial_supply,
            "mint" if self.credit_increases_supply else "transfer",
        )

    def _validate(self):
        if len(self.accounts) == 0:
            raise ConfigurationError("at least one account (the owner) is required")

        if not callable(self.token):
            raise ConfigurationError(
                f"`token` must be a factory callable, got {type(self.token).__name__}"
            )

        if self.mint is None and self.transfer is None:
            raise ConfigurationError(
                "no crediting callback configured",
                hint="pass `mint` if crediting creates tokens, `transfer` if it moves them",
            )
        if self.mint is not None and self.transfer is not None:
            raise ConfigurationError("`mint` and `transfer` are mutually exclusive")

        for fn_name in ("mint", "transfer", "before_each", "after_each"):
            fn = getattr(self, fn_name)
            if fn is not None and not callable(fn):
                raise ConfigurationError(f"`{fn_name}` must be callable")

        if not is_amount(self.initial_supply):
            raise ConfigurationError(f"invalid initial supply: {self.initial_supply!r}")

        for entry in self.initial_balances:
            if len(entry) != 2 or not is_amount(entry[1]):
                raise ConfigurationError(
                    f"invalid initial balance entry: {entry!r}",
                    hint="expected (account, amount)",
                )

        for entry in self.initial_allowances:
            if len(entry) != 3 or not is_amount(entry[2]):
                raise ConfigurationError(
                    f"invalid initial allowance entry: {entry!r}",
                    hint="expected (owner, spender, amount)",
                )

        if self.decimals is not None and not is_amount(self.decimals):
            raise ConfigurationError(f"invalid expected decimals: {self.decimals!r}")

        if not self.revert_messages or not all(
            isinstance(s, str) and s for s in self.revert_messages
        ):
            raise ConfigurationError(
                f"revert_messages must be non-empty strings, got {self.revert_messages!r}"
            )

        balance_sum = sum(amount for _, amount in self.initial_balances)
        if self.initial_balances and balance_sum != self.initial_supply:
            logger.warning(
                "initial balances sum to %s but initial supply is %s; "
                "skipping the supply conservation check",
                balance_sum,
                self.initial_supply,
            )

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "SuiteConfig":
        """
        Build a config from a loose options mapping.

        Both the field names of this class and the camelCase names in
        OPTION_ALIASES are accepted.
        """
        field_names = {f.name for f in dataclasses.fields(cls)}
        kwargs = {}
        for key, value in options.items():
            name = OPTION_ALIASES.get(key, key)
            if name not in field_names:
                raise ConfigurationError(f"unknown suite option: {key!r}")
            if name in kwargs:
                raise ConfigurationError(f"suite option given twice: {key!r}")
            kwargs[name] = value

        for required in ("accounts", "token"):
            if required not in kwargs:
                raise ConfigurationError(f"missing required suite option: {required!r}")

        return cls(**kwargs)

    @property
    def credit_increases_supply(self) -> bool:
        return self.mint is not None

    @property
    def credit(self) -> Callable[[Any, Any, int], Any]:
        if self.mint is not None:
            return self.mint
        return self.transfer  # type: ignore[return-value]

    @property
    def balances_cover_supply(self) -> bool:
        # true if the initial balances account for every token in existence,
        # including a zero supply with no balances
        return sum(amount for _, amount in self.initial_balances) == self.initial_supply

    def participant(self, role: str):
        """
        Return the account playing `role` ("owner", "alice", "bob" or "charles").

        Raises ConfigurationError if not enough accounts were supplied.
        """
        try:
            index = ROLES[role]
        except KeyError:
            raise ConfigurationError(f"unknown role: {role!r}") from None

        if index >= len(self.accounts):
            raise ConfigurationError(
                f"role {role!r} needs at least {index + 1} accounts, "
                f"only {len(self.accounts)} configured",
                hint="supply one owner account plus three participant accounts",
            )
        return self.accounts[index]
