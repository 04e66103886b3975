"""
rules/simulation_rules.py

Scenario simulation over the built-in market presets.
"""

from __future__ import annotations

from metrics.types import GroupSpec
from rules.base import ReportDefinition, recommendation
from rules.predicates import Above, Below

SIMULATION_REPORT = ReportDefinition(
    report_type="simulation",
    title="Liquidity pool simulation",
    directory="simulation",
    file_prefix="liquidity-simulation",
    groups=(
        GroupSpec("scenarios"),
        GroupSpec(
            "scenarioResults",
            {
                "highLiquidity": "number",
                "lowLiquidity": "number",
                "volatility": "number",
                "stable": "number",
            },
        ),
        GroupSpec(
            "riskAnalysis",
            {
                "impermanentLoss": "number",
                "slippageRisk": "number",
                "volatilityRisk": "number",
                "totalRiskScore": "number",
            },
        ),
    ),
    rules=(
        recommendation(
            "simulation.low_risk_expansion",
            "Low risk environment, consider expansion",
            Below("riskAnalysis", "totalRiskScore", 5),
        ),
        recommendation(
            "simulation.impermanent_loss_protection",
            "Implement impermanent loss protection",
            Above("riskAnalysis", "impermanentLoss", 5),
        ),
    ),
)
