# ✅ РАЗВЕРТЫВАНИЕ PRIOR В BASE SEPOLIA
DEFAULT_RPC_URL = "https://base-sepolia-rpc.publicnode.com"
DEFAULT_CHAIN_ID = 84532

PRIOR_ADDRESS = "0xc19Ec2EEBB009b2422514C51F9118026f1cD89ba"
USDT_ADDRESS = "0x014397DaEa96CaC46DbEdcbce50A42D5e0152B2E"
USDC_ADDRESS = "0x109694D75363A75317A8136D80f50F871E81044e"
FAUCET_ADDRESS = "0xCa602D9E45E1Ed25105Ee43643ea936B8e2Fd6B7"
ROUTER_ADDRESS = "0x0f1DADEcc263eB79AE3e4db0d57c49a8b6178B0B"

# Десятичные знаки токенов
TOKEN_DECIMALS = {
    "PRIOR": 18,
    "USDT": 6,
    "USDC": 6,
}

# Токены, в которые свапается PRIOR
SWAP_TOKENS = ("USDT", "USDC")

# Селекторы функций роутера для каждого целевого токена
SWAP_SELECTORS = {
    "USDT": "0x03b530a3",
    "USDC": "0xf3b68002",
}

ERC20_ABI = [
    {
        "constant": False,
        "inputs": [
            {"name": "_spender", "type": "address"},
            {"name": "_value", "type": "uint256"}
        ],
        "name": "approve",
        "outputs": [{"name": "success", "type": "bool"}],
        "type": "function"
    },
    {
        "constant": True,
        "inputs": [{"name": "_owner", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"name": "balance", "type": "uint256"}],
        "type": "function"
    },
    {
        "constant": True,
        "inputs": [
            {"name": "_owner", "type": "address"},
            {"name": "_spender", "type": "address"}
        ],
        "name": "allowance",
        "outputs": [{"name": "", "type": "uint256"}],
        "type": "function"
    }
]

FAUCET_ABI = [
    {
        "inputs": [],
        "name": "claimTokens",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function"
    }
]

SYMBOLS = {
    'info': '📋',
    'success': '✅',
    'error': '❌',
    'warning': '⚠️',
    'pending': '⏳',
    'wallet': '💳',
    'eth': '💎',
    'prior': '🔶',
    'usdt': '💵',
    'usdc': '💰',
    'swap': '🔄',
    'approve': '🔑',
    'wait': '⌛',
    'faucet': '💧',
    'network': '🌐',
    'gas': '⛽',
    'stop': '🛑',
    'critical': '💥',
    'config': '🔧',
    'search': '🔍',
    'target': '🎯',
    'done': '🎉',
}

# Источники кошельков
SOURCE_ENV = "env"
SOURCE_GENERATED = "generated"


def short_address(address: str) -> str:
    """Сокращенный адрес для вывода: 0x1234...abcd"""
    if not address or len(address) < 10:
        return address or ""
    return f"{address[:6]}...{address[-4:]}"
