# nosec B101


from decimal import Decimal

import pytest

from domain.exceptions.rates import ParseError
from domain.parsing import parse_tally_entries, parse_timestamp, parse_timestamps


def test_parse_timestamp_with_millis():
    assert parse_timestamp('2010-10-10T11:11:11.111Z') == 1286709071111


def test_parse_timestamp_without_fraction_and_lowercase_separator():
    assert parse_timestamp('2010-10-10t11:11:11Z') == 1286709071000
    assert parse_timestamp('2010-10-10 11:11:11Z') == 1286709071000


@pytest.mark.parametrize('token', [
    '2010-10-10T11:11:11.111',
    '2010-10-10T11:11:11+00:00',
    '2010-10-10',
    'yesterday',
    '',
])
def test_parse_timestamp_rejects_bad_shapes(token):
    with pytest.raises(ParseError):
        parse_timestamp(token)


def test_parse_timestamp_rejects_impossible_dates():
    with pytest.raises(ParseError) as exc_info:
        parse_timestamp('2010-13-40T11:11:11.111Z')

    assert 'not a valid date' in str(exc_info.value)


def test_parse_timestamps_keeps_order_and_duplicates():
    result = parse_timestamps('2010-10-10T11:11:11.111Z,2010-10-10T09:11:11.111Z,2010-10-10T11:11:11.111Z')

    assert result == [1286709071111, 1286701871111, 1286709071111]


def test_parse_timestamps_fails_on_any_bad_token():
    with pytest.raises(ParseError):
        parse_timestamps('2010-10-10T11:11:11.111Z,nope')


def test_parse_timestamps_empty():
    with pytest.raises(ParseError):
        parse_timestamps('')


def test_parse_tally_entries():
    entries = parse_tally_entries(
        '1200000000000000000@2020-01-04T11:00:00.000Z,0.5@2010-10-10T11:11:11.111Z'
    )

    assert len(entries) == 2
    assert entries[0].amount == Decimal('1200000000000000000')
    assert entries[0].timestamp == 1578135600000
    assert entries[1].amount == Decimal('0.5')
    assert entries[1].timestamp == 1286709071111


@pytest.mark.parametrize('text', [
    '2020-01-04T11:00:00.000Z',
    '@2020-01-04T11:00:00.000Z',
    'abc@2020-01-04T11:00:00.000Z',
    'NaN@2020-01-04T11:00:00.000Z',
    '1@2020-01-04',
    '1@2020-01-04T11:00:00.000Z,2',
])
def test_parse_tally_entries_rejects_malformed_values(text):
    with pytest.raises(ParseError):
        parse_tally_entries(text)
