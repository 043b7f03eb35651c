class ConformanceException(Exception):
    """
    Base erc20_conformance exception class.

    This exception is not raised directly. Other exceptions inherit it in
    order to share the message / hint formatting.
    """

    def __init__(self, message="Error Message not found.", *, hint=None):
        """
        Exception initializer.

        Arguments
        ---------
        message : str
            Error message to display with the exception.
        hint : str | Callable[[], str], optional
            Extra context appended to the message. May be a callable, in
            which case it is evaluated when the message is formatted.
        """
        self._message = message
        self._hint = hint
        super().__init__(message)

    @property
    def hint(self):
        if callable(self._hint):
            return self._hint()
        return self._hint

    @property
    def message(self):
        msg = self._message
        if self.hint:
            msg += f"\n\n  (hint: {self.hint})"
        return msg

    def __str__(self):
        return self.message


class ConfigurationError(ConformanceException, ValueError):
    """Malformed or insufficient suite configuration."""


class Revert(ConformanceException):
    """A token call was rejected and its effects discarded."""

    def __init__(self, reason="", **kwargs):
        self.reason = reason
        message = f"revert: {reason}" if reason else "revert"
        super().__init__(message, **kwargs)


class ConformanceFailure(ConformanceException, AssertionError):
    """
    Base class for failures detected by the suite itself.

    Subclasses AssertionError so that test runners report these as test
    failures rather than errors.
    """


class RevertNotReceived(ConformanceFailure):
    """A rejection was expected but the call succeeded."""


class UnexpectedError(ConformanceFailure):
    """A call failed, but not for any of the anticipated reasons."""


class EventMismatch(ConformanceFailure):
    """Emitted events do not match the expected event."""


class ValueMismatch(ConformanceFailure):
    """A queried value (balance, allowance, return value...) is not the expected one."""
