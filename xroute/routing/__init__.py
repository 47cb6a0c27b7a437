"""Cross-chain routing.

Module structure:
- simulator.py: SwapStepSimulator and exchange quoters
- pathfinding.py: PathEnumerator for same-chain, direct and hub paths
- scoring.py: RouteScorer and route/hop classification
- selection.py: select_best_route under an objective
- optimizer.py: RouteOptimizer composing the pipeline
"""

from xroute.routing.optimizer import RouteOptimizer
from xroute.routing.pathfinding import PathEnumerator
from xroute.routing.scoring import RouteScorer, classify_route
from xroute.routing.selection import select_best_route
from xroute.routing.simulator import (
    ExchangeQuoter,
    FlatFeeQuoter,
    SwapStepSimulator,
    Web3ExchangeQuoter,
)

__all__ = [
    "ExchangeQuoter",
    "FlatFeeQuoter",
    "PathEnumerator",
    "RouteOptimizer",
    "RouteScorer",
    "SwapStepSimulator",
    "Web3ExchangeQuoter",
    "classify_route",
    "select_best_route",
]
