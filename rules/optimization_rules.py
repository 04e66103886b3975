"""
rules/optimization_rules.py

Pool rebalancing checks.

Efficiency, liquidity ratio and balance ratio are 18-decimal fixed-point
ratios on chain, so ``0.8`` here means ``0.8 * 10**18`` raw.
"""

from __future__ import annotations

from metrics.types import GroupSpec
from rules.base import ReportDefinition, finding, recommendation
from rules.predicates import Above, Below

POOL_EFFICIENCY = GroupSpec(
    "poolEfficiency",
    {
        "efficiency": "wei",
        "liquidityRatio": "wei",
        "balanceRatio": "wei",
    },
)

OPTIMIZATION_REPORT = ReportDefinition(
    report_type="optimization",
    title="Liquidity pool optimization",
    directory="optimization",
    file_prefix="optimization",
    groups=(
        GroupSpec("poolInfo"),
        GroupSpec("poolStats"),
        POOL_EFFICIENCY,
    ),
    rules=(
        finding(
            "optimization.low_efficiency",
            "Pool efficiency low - consider rebalancing",
            Below("poolEfficiency", "efficiency", "0.8"),
        ),
        finding(
            "optimization.low_liquidity_ratio",
            "Liquidity ratio low - add more liquidity",
            Below("poolEfficiency", "liquidityRatio", "0.9"),
        ),
        finding(
            "optimization.balance_imbalance",
            "Token balance imbalance detected",
            Above("poolEfficiency", "balanceRatio", "1.2"),
        ),
        recommendation(
            "optimization.rebalance_weights",
            "Consider rebalancing pool weights",
            Below("poolEfficiency", "efficiency", "0.8"),
        ),
        recommendation(
            "optimization.add_liquidity",
            "Add more liquidity to improve depth",
            Below("poolEfficiency", "liquidityRatio", "0.9"),
        ),
    ),
)
