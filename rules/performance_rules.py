"""
rules/performance_rules.py

Response time, error rate, efficiency, user experience and scalability.
"""

from __future__ import annotations

from metrics.types import GroupSpec
from rules.base import ReportDefinition, recommendation
from rules.predicates import Above, Below

PERFORMANCE_REPORT = ReportDefinition(
    report_type="performance",
    title="Liquidity pool performance analysis",
    directory="performance",
    file_prefix="liquidity-performance",
    groups=(
        GroupSpec(
            "performanceMetrics",
            {
                "responseTime": "number",
                "transactionSpeed": "number",
                "throughput": "number",
                "uptime": "number",
                "errorRate": "number",
                "gasEfficiency": "number",
            },
        ),
        GroupSpec(
            "efficiencyScores",
            {
                "liquidityEfficiency": "number",
                "poolUtilization": "number",
                "tradingEfficiency": "number",
                "userEngagement": "number",
                "capitalEfficiency": "number",
            },
        ),
        GroupSpec(
            "userExperience",
            {
                "interfaceUsability": "number",
                "transactionEase": "number",
                "mobileCompatibility": "number",
                "loadingSpeed": "number",
                "customerSatisfaction": "number",
            },
        ),
        GroupSpec(
            "scalability",
            {
                "userCapacity": "number",
                "transactionCapacity": "number",
                "storageCapacity": "number",
                "networkCapacity": "number",
                "futureGrowth": "number",
            },
        ),
    ),
    rules=(
        # responseTime is in milliseconds
        recommendation(
            "performance.slow_response",
            "Optimize response time for better user experience",
            Above("performanceMetrics", "responseTime", 2000),
        ),
        recommendation(
            "performance.high_error_rate",
            "Reduce error rate through system optimization",
            Above("performanceMetrics", "errorRate", 1),
        ),
        recommendation(
            "performance.low_liquidity_efficiency",
            "Improve liquidity pool operational efficiency",
            Below("efficiencyScores", "liquidityEfficiency", 75),
        ),
        recommendation(
            "performance.low_customer_satisfaction",
            "Enhance user experience and satisfaction",
            Below("userExperience", "customerSatisfaction", 85),
        ),
    ),
)
