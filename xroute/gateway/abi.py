"""ABIs for the deployed quoting contracts - minimal, just the read functions we call."""

ROUTE_TUPLE_COMPONENTS = [
    {"name": "path", "type": "address[]"},
    {"name": "dexRouters", "type": "address[]"},
    {"name": "expectedOutput", "type": "uint256"},
    {"name": "estimatedGas", "type": "uint256"},
    {"name": "liquidityDepth", "type": "uint256"},
    {"name": "priceImpact", "type": "uint256"},
    {"name": "netValue", "type": "uint256"},
    {"name": "confidence", "type": "uint256"},
]

LIQUIDITY_AGGREGATOR_ABI = [
    {
        "name": "findBestRoute",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "chainId", "type": "uint256"},
            {"name": "tokenIn", "type": "address"},
            {"name": "tokenOut", "type": "address"},
            {"name": "amountIn", "type": "uint256"},
        ],
        "outputs": [{"name": "route", "type": "tuple", "components": ROUTE_TUPLE_COMPONENTS}],
    },
    {
        "name": "getRouteEfficiency",
        "type": "function",
        "stateMutability": "view",
        "inputs": [
            {"name": "chainId", "type": "uint256"},
            {"name": "tokenIn", "type": "address"},
            {"name": "tokenOut", "type": "address"},
            {"name": "amountIn", "type": "uint256"},
            {"name": "path", "type": "address[]"},
            {"name": "dexRouters", "type": "address[]"},
        ],
        "outputs": [
            {"name": "efficiency", "type": "uint256"},
            {"name": "netValue", "type": "uint256"},
        ],
    },
    {
        "name": "getActiveDEXs",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "chainId", "type": "uint256"}],
        "outputs": [{"name": "", "type": "address[]"}],
    },
    {
        "name": "dexInfoByChain",
        "type": "function",
        "stateMutability": "view",
        "inputs": [
            {"name": "", "type": "uint256"},
            {"name": "", "type": "address"},
        ],
        "outputs": [
            {"name": "name", "type": "string"},
            {"name": "factory", "type": "address"},
            {"name": "router", "type": "address"},
            {"name": "gasOverhead", "type": "uint256"},
            {"name": "reliabilityScore", "type": "uint256"},
            {"name": "isActive", "type": "bool"},
            {"name": "volumeTraded", "type": "uint256"},
        ],
    },
]

CROSS_CHAIN_SWAP_ROUTER_ABI = [
    {
        "name": "getExpectedOutput",
        "type": "function",
        "stateMutability": "view",
        "inputs": [
            {"name": "tokenIn", "type": "address"},
            {"name": "tokenOut", "type": "address"},
            {"name": "amountIn", "type": "uint256"},
            {"name": "dexRouter", "type": "address"},
            {"name": "path", "type": "address[]"},
        ],
        "outputs": [{"name": "expectedOut", "type": "uint256"}],
    },
    {
        "name": "getRouter",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "address"}],
    },
    {
        "name": "supportedDEXs",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "", "type": "address"}],
        "outputs": [{"name": "", "type": "bool"}],
    },
    {
        "name": "paused",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "bool"}],
    },
    {
        "name": "feeRecipient",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "address"}],
    },
    {
        "name": "minGasLimit",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
    },
]

__all__ = ["CROSS_CHAIN_SWAP_ROUTER_ABI", "LIQUIDITY_AGGREGATOR_ABI"]
