"""
rules/liquidity_optimization_rules.py

Liquidity position optimization: current reserves, opportunities and impact.
"""

from __future__ import annotations

from metrics.types import GroupSpec
from rules.base import ReportDefinition, finding, recommendation
from rules.predicates import Above, Below

LIQUIDITY_OPTIMIZATION_REPORT = ReportDefinition(
    report_type="liquidity-optimization",
    title="Liquidity optimization",
    directory="optimization",
    file_prefix="liquidity-optimization",
    groups=(
        GroupSpec(
            "currentLiquidity",
            {
                "reserve1": "wei",
                "reserve2": "wei",
                "totalLiquidity": "wei",
                "liquidityRatio": "number",
            },
        ),
        GroupSpec("optimizationOpportunities"),
        GroupSpec("suggestedActions"),
        GroupSpec(
            "riskAssessment",
            {
                "priceVolatility": "number",
                "impermanentLoss": "number",
                "slippageRisk": "number",
            },
        ),
        GroupSpec(
            "performanceImpact",
            {
                "efficiencyScore": "number",
                "transactionCost": "number",
                "userExperience": "number",
            },
        ),
    ),
    rules=(
        finding(
            "liquidity_optimization.high_impermanent_loss",
            "High impermanent loss risk",
            Above("riskAssessment", "impermanentLoss", 10),
        ),
        finding(
            "liquidity_optimization.high_slippage_risk",
            "High slippage risk identified",
            Above("riskAssessment", "slippageRisk", 5),
        ),
        recommendation(
            "liquidity_optimization.low_efficiency",
            "Improve liquidity pool operational efficiency",
            Below("performanceImpact", "efficiencyScore", 75),
        ),
    ),
)
