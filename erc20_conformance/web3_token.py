"""
Adapter exposing a web3.py contract as a token under test.

    w3 = Web3(EthereumTesterProvider())
    token = deploy(w3, abi, bytecode, "Token", "TKN", 18)
    await token.transfer.call(bob, 1, sender=alice)      # eth_call
    await token.transfer.transact(bob, 1, sender=alice)  # eth_sendTransaction

Reverted transactions surface as whatever web3 raises for them (the
messages contain "revert"), or as `Revert` for mined transactions with a
failed status.
"""
import logging
from typing import Any, Optional

from web3 import Web3
from web3.contract import Contract
from web3.logs import DISCARD

from erc20_conformance.contract import EventLog, Receipt
from erc20_conformance.exceptions import Revert
from erc20_conformance.utils import short_address

logger = logging.getLogger(__name__)

OPTIONAL_VIEWS = ("name", "symbol", "decimals")
OPTIONAL_MUTATIONS = ("increaseApproval", "decreaseApproval")


class Web3Method:
    """A state-changing contract function with `call` / `transact` access."""

    def __init__(self, token: "Web3Token", fn_name: str):
        self._token = token
        self._fn_name = fn_name

    def __repr__(self):
        return f"<Web3Method {self._fn_name}>"

    def _prepared(self, args):
        return getattr(self._token.contract.functions, self._fn_name)(*args)

    async def call(self, *args, sender) -> Any:
        return self._prepared(args).call({"from": sender})

    async def transact(self, *args, sender) -> Receipt:
        tx_params = {"from": sender, **self._token.tx_params}
        tx_hash = self._prepared(args).transact(tx_params)
        logger.debug(
            "%s%r from %s: %s", self._fn_name, args, short_address(sender), tx_hash.hex()
        )

        receipt = self._token.w3.eth.wait_for_transaction_receipt(tx_hash)
        if receipt["status"] == 0:
            raise Revert(f"transaction {tx_hash.hex()} failed")

        return Receipt(logs=self._token.decode_logs(receipt), tx_hash=tx_hash)


class Web3Token:
    """
    Wrap `contract` so the suite can drive it.

    `name`, `symbol`, `decimals`, `increaseApproval` and `decreaseApproval`
    are only exposed when the contract ABI declares them, so the suite can
    tell whether they exist.
    """

    def __init__(
        self, w3: Web3, contract: Contract, deployer: Any = None, tx_params: Optional[dict] = None
    ):
        self.w3 = w3
        self.contract = contract
        self.deployer = deployer
        self.tx_params = tx_params or {}

        self.address = contract.address
        self.approve = Web3Method(self, "approve")
        self.transfer = Web3Method(self, "transfer")
        self.transferFrom = Web3Method(self, "transferFrom")

        abi_names = {item.get("name") for item in contract.abi if item["type"] == "function"}
        for fn_name in OPTIONAL_VIEWS:
            if fn_name in abi_names:
                setattr(self, fn_name, self._view(fn_name))
        for fn_name in OPTIONAL_MUTATIONS:
            if fn_name in abi_names:
                setattr(self, fn_name, Web3Method(self, fn_name))

        self._event_names = [item["name"] for item in contract.abi if item["type"] == "event"]

    def __repr__(self):
        return f"<Web3Token {self.address}>"

    def _view(self, fn_name):
        async def view(*args):
            return getattr(self.contract.functions, fn_name)(*args).call()

        view.__name__ = fn_name
        return view

    def method(self, fn_name: str) -> Web3Method:
        """Access any other state-changing function, e.g. `mint`."""
        return Web3Method(self, fn_name)

    async def totalSupply(self) -> int:
        return self.contract.functions.totalSupply().call()

    async def balanceOf(self, owner) -> int:
        return self.contract.functions.balanceOf(owner).call()

    async def allowance(self, owner, spender) -> int:
        return self.contract.functions.allowance(owner, spender).call()

    def decode_logs(self, receipt) -> list[EventLog]:
        decoded = []
        for event_name in self._event_names:
            events = self.contract.events[event_name]().process_receipt(receipt, errors=DISCARD)
            for event in events:
                decoded.append((event["logIndex"], EventLog(event["event"], dict(event["args"]))))

        decoded.sort(key=lambda item: item[0])
        return [log for _, log in decoded]


def deploy(w3: Web3, abi: list, bytecode: Any, *args, sender: Any = None, **tx_params) -> Web3Token:
    """Deploy a token contract and wrap it. Defaults to the first node account as deployer."""
    if sender is None:
        sender = w3.eth.accounts[0]

    factory = w3.eth.contract(abi=abi, bytecode=bytecode)
    tx_hash = factory.constructor(*args).transact({"from": sender, **tx_params})
    address = w3.eth.wait_for_transaction_receipt(tx_hash)["contractAddress"]
    logger.debug("deployed token at %s", address)

    contract = w3.eth.contract(address=address, abi=abi)
    return Web3Token(w3, contract, deployer=sender, tx_params=tx_params)


def mint_with(fn_name: str = "mint", sender: Any = None):
    """
    Return a `SuiteConfig.mint` callback calling `fn_name(to, amount)`, sent
    from `sender` (the deployer by default).
    """

    async def mint(token: Web3Token, to, amount: int) -> None:
        await token.method(fn_name).transact(to, amount, sender=sender or token.deployer)

    return mint


def transfer_with(sender: Any = None):
    """
    Return a `SuiteConfig.transfer` callback funding accounts with a plain
    `transfer` from `sender` (the deployer by default).
    """

    async def transfer(token: Web3Token, to, amount: int) -> None:
        await token.transfer.transact(to, amount, sender=sender or token.deployer)

    return transfer
