"""Scoring and CI threshold gate."""

from src.scoring.scorer import calculate_overall_score, generate_recommendations
from src.scoring.threshold_gate import GateResult, ThresholdGate

__all__ = [
    "calculate_overall_score",
    "generate_recommendations",
    "GateResult",
    "ThresholdGate",
]
