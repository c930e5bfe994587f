# pipeline/risk.py
from typing import Iterable, List

from pipeline.models import Position, RiskAssessment

LTV_THRESHOLD = 85.0   # percent


def evaluate(positions: Iterable[Position], threshold: float = LTV_THRESHOLD) -> List[RiskAssessment]:
    """Return the positions whose LTV is strictly above ``threshold``."""
    flagged = []
    for pos in positions:
        ltv = pos.ltv()
        if ltv is None:        # zero collateral
            continue
        if ltv > threshold:    # NaN compares False
            flagged.append(RiskAssessment(position=pos, ltv=ltv))
    return flagged


def shorten_identifier(identifier: str) -> str:
    if len(identifier) <= 15:
        return identifier
    return f"{identifier[:6]}...{identifier[-6:]}"


def format_alert(assessment: RiskAssessment) -> str:
    short = shorten_identifier(assessment.position.identifier)
    return f"High LTV Alert! Wallet {short} is at {assessment.ltv:.2f}% LTV."
