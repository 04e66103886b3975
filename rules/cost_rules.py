"""
rules/cost_rules.py

Cost breakdown, efficiency, optimization potential and revenue analysis.

``costPerTransaction`` is reported in wei and compared in token units;
the remaining amounts are plain figures reported by the pool.
"""

from __future__ import annotations

from metrics.types import GroupSpec
from rules.base import ReportDefinition, recommendation
from rules.predicates import Above, Below

COST_REPORT = ReportDefinition(
    report_type="cost",
    title="Liquidity pool cost analysis",
    directory="cost",
    file_prefix="liquidity-cost-analysis",
    groups=(
        GroupSpec(
            "costBreakdown",
            {
                "developmentCost": "number",
                "maintenanceCost": "number",
                "operationalCost": "number",
                "securityCost": "number",
                "gasCost": "number",
                "totalCost": "number",
            },
        ),
        GroupSpec(
            "efficiencyMetrics",
            {
                "costPerTransaction": "wei",
                "costPerLiquidity": "number",
                "roi": "number",
                "costEffectiveness": "number",
                "efficiencyScore": "number",
            },
        ),
        GroupSpec(
            "costOptimization",
            {
                "optimizationOpportunities": "json",
                "potentialSavings": "number",
                "implementationTime": "number",
                "riskLevel": "text",
            },
        ),
        GroupSpec(
            "revenueAnalysis",
            {
                "totalRevenue": "number",
                "tradingFees": "number",
                "platformFees": "number",
                "netProfit": "number",
                "profitMargin": "number",
            },
        ),
    ),
    rules=(
        recommendation(
            "cost.high_total_cost",
            "Review and optimize operational costs",
            Above("costBreakdown", "totalCost", 1_500_000),
        ),
        recommendation(
            "cost.expensive_transactions",
            "Reduce transaction costs for better efficiency",
            Above("efficiencyMetrics", "costPerTransaction", "0.15"),
        ),
        recommendation(
            "cost.thin_profit_margin",
            "Improve profit margins through cost optimization",
            Below("revenueAnalysis", "profitMargin", 25),
        ),
        recommendation(
            "cost.savings_available",
            "Implement cost optimization measures",
            Above("costOptimization", "potentialSavings", 80_000),
        ),
    ),
)
