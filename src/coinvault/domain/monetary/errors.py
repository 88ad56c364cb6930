class CurrencyError(Exception):
    """Base class for failures raised by the currency engine."""

    pass


class InvalidConfigurationError(CurrencyError, ValueError):
    """Raised at start-up when currency or denomination settings are invalid.

    Examples: negative $digits, negative denomination value, denomination worth less than one cent.
    """

    pass


class ArithmeticOverflowError(CurrencyError, ArithmeticError):
    """Raised when a cent amount would leave the storable range ($MAX_CENTS).

    Money must never be created or destroyed by wrap-around, so the call fails instead.
    """

    pass


class ContainerDepthExceededError(CurrencyError):
    """Raised when container nesting is deeper than allowed or a container contains itself."""

    pass


class CurrencyFrozenError(CurrencyError, RuntimeError):
    """Raised when a `CurrencyBuilder` is used after `build` was called."""

    pass
