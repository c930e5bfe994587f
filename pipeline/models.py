# ltv-monitor/pipeline/models.py
import math
from dataclasses import dataclass
from typing import Optional


def parse_amount(value) -> float:
    # non-numeric or negative amounts degrade to NaN, which never crosses a threshold
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return math.nan
    return amount if amount >= 0 else math.nan


@dataclass(frozen=True)
class Position:
    identifier:       str
    collateral_value: str      # base units, numeric string
    debt_value:       str

    # Σ(debt) / Σ(collateral) × 100
    def ltv(self) -> Optional[float]:
        collateral = parse_amount(self.collateral_value)
        debt = parse_amount(self.debt_value)
        if collateral == 0:
            return None
        return debt / collateral * 100


@dataclass(frozen=True)
class RiskAssessment:
    position: Position
    ltv:      float

"""
Position is one wallet's collateral/debt snapshot as reported by the lending
pool (both in the pool's base currency). RiskAssessment pairs a position with
its computed LTV and only lives for a single monitor run.
"""
