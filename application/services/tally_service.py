from decimal import ROUND_HALF_UP, Decimal

from application.services.rate_service import RateService
from domain.models.denomination import Denomination
from domain.models.rates import TallyEntry

CENTS = Decimal('0.01')


class TallyService:
	def __init__(self, rate_service: RateService):
		self.rate_service = rate_service

	async def tally(self, currency: str, entries: list[TallyEntry], use_max: bool = False) -> Decimal:
		"""Sum each entry's amount in USD at its window's min (or max) rate."""
		denomination = Denomination.from_code(currency)
		if not entries:
			return Decimal('0.00')

		rates = await self.rate_service.get_rates(
			denomination.base, [entry.timestamp for entry in entries]
		)

		total = Decimal(0)
		for entry, rate in zip(entries, rates, strict=True):
			value = rate.maxrate if use_max else rate.minrate
			total += entry.amount * denomination.multiplier * Decimal(str(value))

		return total.quantize(CENTS, rounding=ROUND_HALF_UP)
