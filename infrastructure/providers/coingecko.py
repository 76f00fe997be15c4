import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from domain.exceptions.rates import UnsupportedCurrencyError, UpstreamFetchError


class CoinGeckoProvider:
    BASE_URL = "https://api.coingecko.com/api/v3"

    # internal base currency -> CoinGecko coin id
    CURRENCY_IDS = {
        "eth": "ethereum",
        "btc": "bitcoin",
    }

    def __init__(
        self,
        api_key: str = "",
        client: httpx.AsyncClient | None = None,
        base_url: str | None = None,
        timeout: int = 10,
        retry_attempts: int = 3,
    ):
        self.api_key = api_key
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.retry_attempts = max(1, retry_attempts)
        headers = {"x-cg-demo-api-key": api_key} if api_key else {}
        self._client = client or httpx.AsyncClient(timeout=timeout, headers=headers)

    @property
    def name(self) -> str:
        return "coingecko"

    def coin_id(self, currency: str) -> str:
        try:
            return self.CURRENCY_IDS[currency]
        except KeyError as e:
            raise UnsupportedCurrencyError(f"unsupported currency {currency}") from e

    async def _request(self, endpoint: str, params: dict) -> dict:
        url = f"{self.base_url}/{endpoint}"

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.retry_attempts),
                wait=wait_exponential(multiplier=1, min=1, max=10),
                retry=retry_if_exception_type(httpx.TransportError),
                reraise=True,
            ):
                with attempt:
                    response = await self._client.get(url, params=params)
            response.raise_for_status()
            data = response.json()

            if isinstance(data, dict) and "error" in data:
                raise UpstreamFetchError(f"CoinGecko API error: {data['error']}")

            return data

        except UpstreamFetchError:
            raise
        except httpx.HTTPStatusError as e:
            raise UpstreamFetchError(
                f"CoinGecko HTTP error {e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except httpx.RequestError as e:
            raise UpstreamFetchError(f"CoinGecko request failed: {e.__class__.__name__}") from e
        except Exception as e:
            raise UpstreamFetchError(f"CoinGecko response parsing error: {str(e)}") from e

    async def fetch_price_series(
        self, currency: str, from_ms: int, to_ms: int
    ) -> list[tuple[int, float]]:
        coin_id = self.coin_id(currency)
        data = await self._request(
            f"coins/{coin_id}/market_chart/range",
            {"vs_currency": "usd", "from": from_ms // 1000, "to": to_ms // 1000},
        )

        try:
            return [(int(epoch_ms), float(price)) for epoch_ms, price in data.get("prices", [])]
        except (AttributeError, TypeError, ValueError) as e:
            raise UpstreamFetchError(f"Malformed price series for {coin_id}") from e

    async def close(self) -> None:
        await self._client.aclose()
