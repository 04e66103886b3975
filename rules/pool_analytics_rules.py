"""
rules/pool_analytics_rules.py

Pool snapshot: configuration, token reserves, APR and liquidity statistics.
No checks are applied; the report is a point-in-time record.
"""

from __future__ import annotations

from metrics.types import GroupSpec
from rules.base import ReportDefinition

POOL_ANALYTICS_REPORT = ReportDefinition(
    report_type="pool-analytics",
    title="Liquidity pool analytics",
    directory="reports",
    file_prefix="pool-analytics",
    groups=(
        GroupSpec(
            "poolInfo",
            {
                "totalSupply": "wei",
                "feeRate": "number",
                "totalVolume": "wei",
                "totalLiquidity": "wei",
                "poolType": "text",
            },
        ),
        GroupSpec(
            "tokenInfo",
            {
                "token1": "text",
                "token2": "text",
                "reserve1": "wei",
                "reserve2": "wei",
            },
        ),
        GroupSpec("apr", {"apr": "number"}),
        GroupSpec(
            "liquidityStats",
            {
                "totalLiquidity": "wei",
                "activePools": "number",
                "avgLiquidity": "wei",
            },
        ),
    ),
)
