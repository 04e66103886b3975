"""
rules/engagement_rules.py

User metrics, engagement scores, retention cohorts and activity patterns.
All rates are percentages.
"""

from __future__ import annotations

from metrics.types import GroupSpec
from rules.base import ReportDefinition, recommendation
from rules.predicates import Below

ENGAGEMENT_REPORT = ReportDefinition(
    report_type="engagement",
    title="Liquidity pool user engagement analysis",
    directory="engagement",
    file_prefix="liquidity-engagement",
    groups=(
        GroupSpec(
            "userMetrics",
            {
                "totalUsers": "number",
                "activeUsers": "number",
                "newUsers": "number",
                "returningUsers": "number",
                "userGrowthRate": "number",
            },
        ),
        GroupSpec(
            "engagementScores",
            {
                "overallEngagement": "number",
                "userRetention": "number",
                "liquidityEngagement": "number",
                "tradingEngagement": "number",
                "rewardEngagement": "number",
            },
        ),
        GroupSpec(
            "retentionAnalysis",
            {
                "day1Retention": "number",
                "day7Retention": "number",
                "day30Retention": "number",
                "cohortAnalysis": "json",
                "churnRate": "number",
            },
        ),
        GroupSpec(
            "activityPatterns",
            {
                "peakHours": "json",
                "weeklyActivity": "json",
                "seasonalTrends": "json",
                "userSegments": "json",
                "engagementFrequency": "json",
            },
        ),
    ),
    rules=(
        recommendation(
            "engagement.low_overall_engagement",
            "Improve overall user engagement",
            Below("engagementScores", "overallEngagement", 70),
        ),
        recommendation(
            "engagement.low_day30_retention",
            "Implement retention strategies",
            Below("retentionAnalysis", "day30Retention", 35),
        ),
        recommendation(
            "engagement.slow_user_growth",
            "Boost user acquisition efforts",
            Below("userMetrics", "userGrowthRate", 6),
        ),
        recommendation(
            "engagement.low_user_retention",
            "Enhance user retention programs",
            Below("engagementScores", "userRetention", 65),
        ),
    ),
)
