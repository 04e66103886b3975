"""
Shared fixtures: one healthy pool whose metrics trip no rule in any report type.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any

import pytest

from metrics.memory import CompositeMetricSource, StaticMetricSource
from metrics.scenarios import ScenarioMetricSource
from metrics.types import MetricGroup, build_group
from rules.catalog import get_definition

POOL_ADDRESS = "0x" + "ab" * 20
ONE_TOKEN = 10**18
FIXED_NOW = datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)

# Group payloads as the metrics gateway returns them. Groups shared between
# report types (poolInfo, riskAssessment) carry the union of their fields.
HEALTHY_GROUPS: dict[str, dict[str, Any]] = {
    # audit
    "auditSummary": {
        "poolType": "constant-product",
        "totalLiquidity": str(1_000_000 * ONE_TOKEN),
        "totalVolume": hex(250_000 * ONE_TOKEN),
        "totalUsers": 150,
        "poolStatus": "active",
        "lastUpdated": 1_700_000_000,
    },
    "securityChecks": {
        "ownership": {"owner": "0x" + "11" * 20, "renounced": False},
        "accessControl": True,
        "upgradeability": {"upgradeable": False},
        "emergencyPause": True,
        "timelock": True,
    },
    "liquidityAnalysis": {
        "liquidityRatio": 0.95,
        "slippageRisk": 2.1,
        "impermanentLoss": 3.5,
        "priceVolatility": 12.5,
        "liquidityDepth": 85,
    },
    "riskAssessment": {
        "marketRisk": 25,
        "technicalRisk": 15,
        "operationalRisk": 10,
        "regulatoryRisk": 20,
        "totalRiskScore": 35,
        "priceVolatility": 12,
        "impermanentLoss": 3,
        "slippageRisk": 1.5,
    },
    # compliance
    "complianceStatus": {
        "regulatoryCompliance": True,
        "legalCompliance": True,
        "financialCompliance": True,
        "technicalCompliance": True,
        "overallScore": 92,
    },
    "regulatoryRequirements": {
        "licensing": True,
        "KYC": True,
        "AML": True,
        "liquidityRequirements": True,
        "investorProtection": True,
    },
    "securityStandards": {
        "codeAudits": True,
        "accessControl": True,
        "securityTesting": True,
        "incidentResponse": True,
        "backupSystems": True,
    },
    "liquidityCompliance": {
        "minimumLiquidity": True,
        "liquidityRatio": {"current": 0.95, "required": 0.8},
        "slippageControl": True,
        "priceStability": True,
        "riskManagement": True,
    },
    # cost
    "costBreakdown": {
        "developmentCost": 500_000,
        "maintenanceCost": 200_000,
        "operationalCost": 300_000,
        "securityCost": 150_000,
        "gasCost": 50_000,
        "totalCost": 1_200_000,
    },
    "efficiencyMetrics": {
        "costPerTransaction": str(5 * ONE_TOKEN // 100),
        "costPerLiquidity": 1.2,
        "roi": 18.5,
        "costEffectiveness": 85,
        "efficiencyScore": 88,
    },
    "costOptimization": {
        "optimizationOpportunities": ["batch fee collection"],
        "potentialSavings": 50_000,
        "implementationTime": 30,
        "riskLevel": "low",
    },
    "revenueAnalysis": {
        "totalRevenue": 2_000_000,
        "tradingFees": 1_500_000,
        "platformFees": 500_000,
        "netProfit": 700_000,
        "profitMargin": 35,
    },
    # performance
    "performanceMetrics": {
        "responseTime": 1200,
        "transactionSpeed": 15,
        "throughput": 1000,
        "uptime": 99.9,
        "errorRate": 0.5,
        "gasEfficiency": 85,
    },
    "efficiencyScores": {
        "liquidityEfficiency": 85,
        "poolUtilization": 78,
        "tradingEfficiency": 92,
        "userEngagement": 88,
        "capitalEfficiency": 82,
    },
    "userExperience": {
        "interfaceUsability": 90,
        "transactionEase": 85,
        "mobileCompatibility": 88,
        "loadingSpeed": 92,
        "customerSatisfaction": 90,
    },
    "scalability": {
        "userCapacity": 10_000,
        "transactionCapacity": 1_000,
        "storageCapacity": 1_000_000,
        "networkCapacity": 100,
        "futureGrowth": 25,
    },
    # security
    "securityAssessment": {
        "securityScore": 88,
        "auditStatus": "passed",
        "lastAudit": "2025-11-01T00:00:00Z",
        "securityGrade": "A",
        "riskLevel": "low",
    },
    "vulnerabilityScan": {
        "criticalVulnerabilities": 0,
        "highVulnerabilities": 1,
        "mediumVulnerabilities": 3,
        "lowVulnerabilities": 5,
        "totalVulnerabilities": 9,
        "scanDate": 1_700_000_000,
    },
    "riskMetrics": {
        "totalRiskScore": 30,
        "financialRisk": 20,
        "operationalRisk": 15,
        "technicalRisk": 25,
        "regulatoryRisk": 10,
    },
    "securityControls": {
        "accessControl": True,
        "encryption": True,
        "backupSystems": True,
        "monitoring": True,
        "incidentResponse": True,
    },
    # user-analytics
    "userDemographics": {
        "totalUsers": 150,
        "activeUsers": 120,
        "newUsers": 25,
        "returningUsers": 95,
        "userDistribution": {"retail": 70, "institutional": 30},
    },
    "engagementMetrics": {
        "avgSessionTime": 12.5,
        "dailyActiveUsers": 80,
        "weeklyActiveUsers": 110,
        "monthlyActiveUsers": 140,
        "userRetention": 80,
        "engagementScore": 82,
    },
    "liquidityPatterns": {
        "avgLiquidityAmount": str(2_500 * ONE_TOKEN),
        "liquidityFrequency": 3,
        "popularTokens": ["TKA", "TKB"],
        "peakLiquidityHours": [14, 15, 16],
        "averageLiquidityPeriod": 30,
        "withdrawalRate": 15,
    },
    "userSegments": {
        "casualLiquidityProviders": 40,
        "activeProviders": 60,
        "professionalProviders": 20,
        "occasionalUsers": 30,
        "highValueProviders": 90,
        "segmentDistribution": {"casual": 40, "active": 60},
    },
    # engagement
    "userMetrics": {
        "totalUsers": 150,
        "activeUsers": 120,
        "newUsers": 25,
        "returningUsers": 95,
        "userGrowthRate": 8,
    },
    "engagementScores": {
        "overallEngagement": 80,
        "userRetention": 75,
        "liquidityEngagement": 70,
        "tradingEngagement": 85,
        "rewardEngagement": 60,
    },
    "retentionAnalysis": {
        "day1Retention": 85,
        "day7Retention": 65,
        "day30Retention": 45,
        "cohortAnalysis": {"2025-12": 0.45},
        "churnRate": 12,
    },
    "activityPatterns": {
        "peakHours": [14, 15],
        "weeklyActivity": {"mon": 20, "tue": 18},
        "seasonalTrends": {},
        "userSegments": ["casual", "active"],
        "engagementFrequency": {"daily": 80},
    },
    # optimization / pool-analytics
    "poolInfo": {
        "totalSupply": str(1_000_000 * ONE_TOKEN),
        "feeRate": 30,
        "totalVolume": str(250_000 * ONE_TOKEN),
        "totalLiquidity": str(1_000_000 * ONE_TOKEN),
        "poolType": "constant-product",
    },
    "poolStats": {"swapCount": 42, "lastSwap": 1_700_000_000},
    "poolEfficiency": {
        "efficiency": str(95 * ONE_TOKEN // 100),
        "liquidityRatio": str(ONE_TOKEN),
        "balanceRatio": str(105 * ONE_TOKEN // 100),
    },
    # liquidity-optimization
    "currentLiquidity": {
        "reserve1": str(500_000 * ONE_TOKEN),
        "reserve2": str(500_000 * ONE_TOKEN),
        "totalLiquidity": str(1_000_000 * ONE_TOKEN),
        "liquidityRatio": 1,
    },
    "optimizationOpportunities": {"rebalance": False, "notes": []},
    "suggestedActions": {"actions": []},
    "performanceImpact": {
        "efficiencyScore": 85,
        "transactionCost": 0.3,
        "userExperience": 90,
    },
    # pool-analytics
    "tokenInfo": {
        "token1": "0x" + "22" * 20,
        "token2": "0x" + "33" * 20,
        "reserve1": str(500_000 * ONE_TOKEN),
        "reserve2": str(500_000 * ONE_TOKEN),
    },
    "apr": {"apr": 12.5},
    "liquidityStats": {
        "totalLiquidity": str(1_000_000 * ONE_TOKEN),
        "activePools": 1,
        "avgLiquidity": str(1_000_000 * ONE_TOKEN),
    },
}


@pytest.fixture()
def healthy_groups() -> dict[str, dict[str, Any]]:
    """Fresh, mutable copy of the healthy pool payloads."""
    return copy.deepcopy(HEALTHY_GROUPS)


@pytest.fixture()
def make_groups() -> Callable[..., dict[str, MetricGroup]]:
    """
    Build normalized MetricGroups for a report type from raw payloads.

    Only groups present in *payloads* are built, so tests can leave groups
    out on purpose.
    """

    def _make(report_type: str, payloads: Mapping[str, Any]) -> dict[str, MetricGroup]:
        definition = get_definition(report_type)
        return {
            spec.name: build_group(spec, payloads[spec.name])
            for spec in definition.groups
            if spec.name in payloads
        }

    return _make


@pytest.fixture()
def pool_source(healthy_groups: dict[str, dict[str, Any]]) -> CompositeMetricSource:
    """Scenario presets in front of an in-memory source for POOL_ADDRESS."""
    return CompositeMetricSource(
        [ScenarioMetricSource(), StaticMetricSource({POOL_ADDRESS: healthy_groups})]
    )


@pytest.fixture()
def pool_address() -> str:
    return POOL_ADDRESS


@pytest.fixture()
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW
