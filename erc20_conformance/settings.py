import logging
import os

DEFAULT_REVERT_MESSAGES = ("revert", "invalid opcode")

_revert_messages_str = os.environ.get("ERC20_SUITE_REVERT_MESSAGES")
if _revert_messages_str is not None:
    REVERT_MESSAGES = tuple(s.strip() for s in _revert_messages_str.split(",") if s.strip())
else:
    REVERT_MESSAGES = DEFAULT_REVERT_MESSAGES

ERC20_SUITE_DEBUG = os.environ.get("ERC20_SUITE_DEBUG", "0") == "1"

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(debug: bool = ERC20_SUITE_DEBUG) -> None:
    # only touches the package logger; the host application owns the root logger
    if not debug:
        return

    logger = logging.getLogger("erc20_conformance")
    if any(getattr(h, "_erc20_suite", False) for h in logger.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    handler._erc20_suite = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
