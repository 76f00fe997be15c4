from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from api.dependencies import get_rate_service, get_tally_service
from api.schemas import AggregatedRateResponse
from application.services import RateService, TallyService
from domain.parsing import parse_tally_entries, parse_timestamps

router = APIRouter(tags=['rates'])

CurrencyPath = Annotated[
	str,
	Path(description='Currency or denomination: eth, wei, btc or sat'),
]
ValuesPath = Annotated[
	str,
	Path(description="Comma separated '<amount>@<ISO8601>' values, e.g. 1200000000000000000@2020-01-04T11:00:00.000Z"),
]


@router.get(
	'/rates/{currency}/{timestamps}',
	response_model=list[AggregatedRateResponse],
	status_code=status.HTTP_200_OK,
	summary='Retrieve min/max exchange rates to US dollars',
)
async def get_rates(
	currency: CurrencyPath,
	timestamps: Annotated[
		str,
		Path(description="Comma separated ISO 8601 UTC timestamps, 'YYYY-MM-DDThh:mm:ss.fffZ'"),
	],
	service: Annotated[RateService, Depends(get_rate_service)],
) -> list[AggregatedRateResponse]:
	"""Each timestamp ends a 3 hour window sampled for its lowest and highest rate."""
	instants = parse_timestamps(timestamps)
	result = await service.get_rates(currency, instants)
	return [
		AggregatedRateResponse(timestamp=r.timestamp, minrate=r.minrate, maxrate=r.maxrate)
		for r in result
	]


@router.get(
	'/tallymin/{currency}/{values}',
	status_code=status.HTTP_200_OK,
	summary='US dollar tally of time-stamped values at minimum window rates',
)
async def tally_min(
	currency: CurrencyPath,
	values: ValuesPath,
	service: Annotated[TallyService, Depends(get_tally_service)],
) -> float:
	entries = parse_tally_entries(values)
	total = await service.tally(currency, entries, use_max=False)
	return float(total)


@router.get(
	'/tallymax/{currency}/{values}',
	status_code=status.HTTP_200_OK,
	summary='US dollar tally of time-stamped values at maximum window rates',
)
async def tally_max(
	currency: CurrencyPath,
	values: ValuesPath,
	service: Annotated[TallyService, Depends(get_tally_service)],
) -> float:
	entries = parse_tally_entries(values)
	total = await service.tally(currency, entries, use_max=True)
	return float(total)
