class CurrencyException(Exception):
    pass


class InvalidCurrencyError(CurrencyException):
    pass


class CacheError(CurrencyException):
    pass


class FetchError(CurrencyException):
    """Any failure to obtain live rates. Recovered by the resolver."""


class FetchTimeout(FetchError):
    pass


class FetchTransportError(FetchError):
    pass


class MalformedPayload(FetchError):
    pass


class ConversionError(CurrencyException):
    """Conversion did not produce a number. Surfaced to the caller."""


class RateUnavailableForPair(ConversionError):
    def __init__(self, base: str, target: str):
        self.base = base
        self.target = target
        super().__init__(f"Rate not available for {base} -> {target}")


class NonFiniteComputationResult(ConversionError):
    pass
