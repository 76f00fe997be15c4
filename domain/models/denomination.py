from decimal import Decimal
from enum import Enum

from domain.exceptions.rates import UnsupportedCurrencyError


class Denomination(Enum):
    """Supported currency codes, each tied to a base currency and a fixed multiplier."""

    ETH = ('eth', 'eth', Decimal('1'))
    WEI = ('wei', 'eth', Decimal('1E-18'))
    BTC = ('btc', 'btc', Decimal('1'))
    SAT = ('sat', 'btc', Decimal('1E-8'))

    def __init__(self, code: str, base: str, multiplier: Decimal):
        self.code = code
        self.base = base
        self.multiplier = multiplier

    @classmethod
    def from_code(cls, code: str) -> 'Denomination':
        normalized = (code or '').strip().lower()
        for denomination in cls:
            if denomination.code == normalized:
                return denomination
        supported = ', '.join(d.code for d in cls)
        raise UnsupportedCurrencyError(
            f"unsupported currency '{code}', expected one of: {supported}"
        )


def convert(rate: float, code: str) -> float:
    """Rescale a base-currency rate to the denomination named by ``code``."""
    return rate * float(Denomination.from_code(code).multiplier)
