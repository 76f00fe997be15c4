from .base import PriceSeriesProvider
from .coingecko import CoinGeckoProvider
from .metrics import UpstreamMetrics

__all__ = ['CoinGeckoProvider', 'PriceSeriesProvider', 'UpstreamMetrics']
