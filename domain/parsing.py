import re
from datetime import datetime
from decimal import Decimal, InvalidOperation

from domain.exceptions.rates import ParseError
from domain.models.rates import TallyEntry
from domain.window import to_epoch_millis

TIMESTAMP_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}[tT ]\d{2}:\d{2}:\d{2}(\.\d+)?Z$')


def parse_timestamp(token: str) -> int:
    """Parse a UTC ISO 8601 timestamp ending in 'Z' into epoch millis."""
    token = token.strip()
    if not TIMESTAMP_PATTERN.match(token):
        raise ParseError(f"timestamp '{token}' does not match 'YYYY-MM-DDThh:mm:ss.mmmZ'")
    try:
        moment = datetime.fromisoformat(token[:-1].replace('t', 'T').replace(' ', 'T') + '+00:00')
    except ValueError as e:
        raise ParseError(f"timestamp '{token}' is not a valid date: {e}") from e
    return to_epoch_millis(moment)


def parse_timestamps(text: str) -> list[int]:
    if not text or not text.strip():
        raise ParseError('invalid timestamps, must be a comma separated list of ISO8601 strings')
    return [parse_timestamp(token) for token in text.split(',')]


def parse_tally_entry(token: str) -> TallyEntry:
    amount_text, sep, timestamp_text = token.strip().partition('@')
    if not sep or not amount_text:
        raise ParseError(f"value '{token}' does not match '<amount>@<ISO8601>'")
    try:
        amount = Decimal(amount_text)
    except InvalidOperation as e:
        raise ParseError(f"amount '{amount_text}' is not a number") from e
    if not amount.is_finite():
        raise ParseError(f"amount '{amount_text}' is not a number")
    return TallyEntry(amount=amount, timestamp=parse_timestamp(timestamp_text))


def parse_tally_entries(text: str) -> list[TallyEntry]:
    if not text or not text.strip():
        raise ParseError('invalid values, must be a comma separated list of <amount>@<ISO8601> strings')
    return [parse_tally_entry(token) for token in text.split(',')]
