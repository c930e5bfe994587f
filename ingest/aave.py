# ingest/aave.py
import logging
from typing import List, Sequence

from web3 import Web3
from web3.exceptions import Web3Exception

from pipeline.models import Position

log = logging.getLogger(__name__)

# only the view we need from the Aave V3 Pool
POOL_ABI = [
    {
        "name": "getUserAccountData",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "user", "type": "address"}],
        "outputs": [
            {"name": "totalCollateralBase", "type": "uint256"},
            {"name": "totalDebtBase", "type": "uint256"},
            {"name": "availableBorrowsBase", "type": "uint256"},
            {"name": "currentLiquidationThreshold", "type": "uint256"},
            {"name": "ltv", "type": "uint256"},
            {"name": "healthFactor", "type": "uint256"},
        ],
    }
]


class AavePositionSource:
    """
    Reads collateral and debt for each wallet from the Aave V3 Pool.

    Values come back in the pool's base currency (USD, 8 decimals) and are
    kept as integer strings; the LTV ratio does not depend on the unit.
    """

    name = "aave"

    def __init__(self, pool, wallets: Sequence[str]):
        self.pool    = pool
        self.wallets = tuple(wallets)

    @classmethod
    def from_rpc(cls, rpc_url: str, pool_address: str, wallets: Sequence[str]) -> "AavePositionSource":
        if not rpc_url:
            raise ValueError("ALCHEMY_HTTP_URL is required for the aave position source")
        w3   = Web3(Web3.HTTPProvider(rpc_url))
        pool = w3.eth.contract(address=Web3.to_checksum_address(pool_address), abi=POOL_ABI)
        return cls(pool, wallets)

    def fetch(self) -> List[Position]:
        positions = []
        for wallet in self.wallets:
            try:
                user = Web3.to_checksum_address(wallet)
                data = self.pool.functions.getUserAccountData(user).call()
            except (ValueError, Web3Exception) as e:
                log.error(f"[Aave] ❌ {wallet}: {e}")
                continue
            collateral, debt = data[0], data[1]
            positions.append(Position(identifier=wallet,
                                      collateral_value=str(collateral),
                                      debt_value=str(debt)))
        log.info(f"[Aave] 🌐 Read {len(positions)} positions from pool")
        return positions
