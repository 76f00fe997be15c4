from .rate_fetcher import UpstreamRateFetcher
from .rate_service import RateService
from .tally_service import TallyService

__all__ = ['RateService', 'TallyService', 'UpstreamRateFetcher']
