# nosec B101


from decimal import Decimal

import pytest

from domain.exceptions.rates import UnsupportedCurrencyError
from domain.models.denomination import Denomination, convert


@pytest.mark.parametrize('code,base,multiplier', [
    ('eth', 'eth', Decimal('1')),
    ('wei', 'eth', Decimal('1E-18')),
    ('btc', 'btc', Decimal('1')),
    ('sat', 'btc', Decimal('1E-8')),
])
def test_denomination_table(code, base, multiplier):
    denomination = Denomination.from_code(code)

    assert denomination.code == code
    assert denomination.base == base
    assert denomination.multiplier == multiplier


def test_from_code_is_case_insensitive():
    assert Denomination.from_code('ETH') is Denomination.ETH
    assert Denomination.from_code(' Sat ') is Denomination.SAT


@pytest.mark.parametrize('code', ['usd', 'doge', '', None])
def test_unknown_code_is_rejected(code):
    with pytest.raises(UnsupportedCurrencyError) as exc_info:
        Denomination.from_code(code)

    assert 'unsupported currency' in str(exc_info.value)


def test_convert_scales_by_multiplier():
    assert convert(2000.0, 'eth') == 2000.0
    assert convert(2000.0, 'wei') == pytest.approx(2000.0e-18)
    assert convert(50000.0, 'sat') == pytest.approx(0.0005)


def test_convert_unknown_code():
    with pytest.raises(UnsupportedCurrencyError):
        convert(1.0, 'xrp')
