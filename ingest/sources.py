# ingest/sources.py
from typing import List, Protocol, Sequence

from pipeline.models import Position

# 🧪 mock borrowers, both sitting at 90% LTV
MOCK_POSITIONS = (
    Position(
        identifier="0x1234567890abcdef1234567890abcdef12345678",
        collateral_value="1000000",   # $1M collateral
        debt_value="900000",          # $900K debt
    ),
    Position(
        identifier="0xabcdef1234567890abcdef1234567890abcdef12",
        collateral_value="500000",
        debt_value="450000",
    ),
)


class PositionSource(Protocol):
    name: str

    def fetch(self) -> List[Position]: ...


class StaticPositionSource:
    name = "mock"

    def __init__(self, positions: Sequence[Position] = MOCK_POSITIONS):
        self._positions = tuple(positions)

    def fetch(self) -> List[Position]:
        return list(self._positions)
