"""xroute - cross-chain swap route optimizer."""

from xroute.facade import QuoteFacade, QuoteSession
from xroute.routing.optimizer import RouteOptimizer

__version__ = "0.1.0"
__all__ = ["QuoteFacade", "QuoteSession", "RouteOptimizer", "__version__"]
