from typing import Protocol


class PriceSeriesProvider(Protocol):
    """Market-data source returning raw (epoch millis, USD price) samples."""

    @property
    def name(self) -> str:
        ...

    async def fetch_price_series(
        self, currency: str, from_ms: int, to_ms: int
    ) -> list[tuple[int, float]]:
        ...

    async def close(self) -> None:
        ...
