"""Default protocol parameters for route estimation.

Centralizes the constants used by the simulator, scorer and facade.
OptimizerConfig takes its defaults from here.
"""

from decimal import Decimal

# Flat exchange fee applied per swap step (0.3% fee)
SWAP_FEE_FACTOR = Decimal("0.997")

# Reference input used to rank exchanges on a chain
REFERENCE_SIMULATION_AMOUNT = Decimal(1_000_000)

# Time budget per swap step
SWAP_STEP_SECONDS = 15

# Native bridging between two hub-capable chains
HUB_PROTOCOL_GAS = 200_000
HUB_PROTOCOL_SECONDS = 60
HUB_PROTOCOL_COST_USD = Decimal("0.50")

# Cross-chain messaging for any hop touching a non-hub-capable chain
MESSAGING_GAS = 300_000
MESSAGING_SECONDS = 300
MESSAGING_COST_USD = Decimal("5.00")

# Reference gas price: USD per 100k gas units
USD_PER_100K_GAS = Decimal("0.50")
GAS_UNIT_BATCH = 100_000

# Confidence scoring
CONFIDENCE_START = 100
CONFIDENCE_CHAIN_PENALTY = 10
CONFIDENCE_STEP_PENALTY = 5
CONFIDENCE_FLOOR = 60

# Bucket thresholds (strictly greater than)
CONFIDENCE_HIGH_ABOVE = 80
CONFIDENCE_MEDIUM_ABOVE = 60

# Slippage estimation (percent)
SLIPPAGE_MIN_PERCENT = Decimal("0.1")
SLIPPAGE_MAX_PERCENT = Decimal("3.0")
SLIPPAGE_JITTER_PERCENT = Decimal("0.2")
SLIPPAGE_BASE_PERCENT = Decimal("0.1")
SLIPPAGE_PER_STEP_PERCENT = Decimal("0.1")
SLIPPAGE_PER_HOP_PERCENT = Decimal("0.25")

# Preferred bridge token when several are shared
PREFERRED_BRIDGE_SYMBOL = "USDC"

# Live quoting
LIVE_CALL_TIMEOUT_SECONDS = 5.0
LIVE_GAS_PRICE_GWEI = 25
LIVE_CROSS_CHAIN_GAS_NATIVE = Decimal("0.002")
LIVE_CROSS_CHAIN_BRIDGE_NATIVE = Decimal("0.001")
LIVE_SAME_CHAIN_PROTOCOL_FEE = Decimal("0.0005")
LIVE_CROSS_CHAIN_PROTOCOL_FEE = Decimal("0.001")

# Quote session debounce
QUOTE_DEBOUNCE_SECONDS = 0.5
