"""
rules/user_analytics_rules.py

Liquidity provider demographics, engagement, liquidity patterns and segments.
"""

from __future__ import annotations

from metrics.types import GroupSpec
from rules.base import ReportDefinition, recommendation
from rules.predicates import Above, Below, ExceedsField

USER_ANALYTICS_REPORT = ReportDefinition(
    report_type="user-analytics",
    title="Liquidity pool user analytics",
    directory="analytics",
    file_prefix="liquidity-user-analytics",
    groups=(
        GroupSpec(
            "userDemographics",
            {
                "totalUsers": "number",
                "activeUsers": "number",
                "newUsers": "number",
                "returningUsers": "number",
                "userDistribution": "json",
            },
        ),
        GroupSpec(
            "engagementMetrics",
            {
                "avgSessionTime": "number",
                "dailyActiveUsers": "number",
                "weeklyActiveUsers": "number",
                "monthlyActiveUsers": "number",
                "userRetention": "number",
                "engagementScore": "number",
            },
        ),
        GroupSpec(
            "liquidityPatterns",
            {
                "avgLiquidityAmount": "wei",
                "liquidityFrequency": "number",
                "popularTokens": "json",
                "peakLiquidityHours": "json",
                "averageLiquidityPeriod": "number",
                "withdrawalRate": "number",
            },
        ),
        GroupSpec(
            "userSegments",
            {
                "casualLiquidityProviders": "number",
                "activeProviders": "number",
                "professionalProviders": "number",
                "occasionalUsers": "number",
                "highValueProviders": "number",
                "segmentDistribution": "json",
            },
        ),
    ),
    rules=(
        recommendation(
            "user_analytics.low_retention",
            "Low user retention - implement retention strategies",
            Below("engagementMetrics", "userRetention", 75),
        ),
        recommendation(
            "user_analytics.high_withdrawal_rate",
            "High withdrawal rate - improve user retention",
            Above("liquidityPatterns", "withdrawalRate", 25),
        ),
        recommendation(
            "user_analytics.few_high_value_providers",
            "Low high-value providers - focus on premium user acquisition",
            Below("userSegments", "highValueProviders", 80),
        ),
        recommendation(
            "user_analytics.casual_outnumber_active",
            "More casual providers than active providers - consider provider engagement",
            ExceedsField("userSegments", "casualLiquidityProviders", "activeProviders"),
        ),
    ),
)
