class RateServiceError(Exception):
    pass


class UnsupportedCurrencyError(RateServiceError):
    pass


class ParseError(RateServiceError):
    pass


class InsufficientHistoryError(RateServiceError):
    """Raised when a window's oldest bucket has no known rate."""


class StoreError(RateServiceError):
    pass


class StoreReadError(StoreError):
    pass


class StoreWriteError(StoreError):
    pass


class UpstreamFetchError(RateServiceError):
    pass


class CacheError(RateServiceError):
    pass
