"""
rules/audit_rules.py

Pool audit: summary, security checks, liquidity analysis, risk assessment.
"""

from __future__ import annotations

from metrics.types import GroupSpec
from rules.base import RECOMMENDATION, ReportDefinition, Rule, finding, recommendation
from rules.predicates import Above, Below

AUDIT_GROUPS: tuple[GroupSpec, ...] = (
    GroupSpec(
        "auditSummary",
        {
            "poolType": "text",
            "totalLiquidity": "wei",
            "totalVolume": "wei",
            "totalUsers": "number",
            "poolStatus": "text",
            "lastUpdated": "timestamp",
        },
    ),
    GroupSpec(
        "securityChecks",
        {
            "ownership": "json",
            "accessControl": "bool",
            "upgradeability": "json",
            "emergencyPause": "bool",
            "timelock": "bool",
        },
    ),
    GroupSpec(
        "liquidityAnalysis",
        {
            "liquidityRatio": "number",
            "slippageRisk": "number",
            "impermanentLoss": "number",
            "priceVolatility": "number",
            "liquidityDepth": "number",
        },
    ),
    GroupSpec(
        "riskAssessment",
        {
            "marketRisk": "number",
            "technicalRisk": "number",
            "operationalRisk": "number",
            "regulatoryRisk": "number",
            "totalRiskScore": "number",
        },
    ),
)

AUDIT_RULES: tuple[Rule, ...] = (
    finding(
        "audit.high_overall_risk",
        "High overall risk detected",
        Above("riskAssessment", "totalRiskScore", 70),
    ),
    finding(
        "audit.high_slippage_risk",
        "High slippage risk identified",
        Above("liquidityAnalysis", "slippageRisk", 5),
    ),
    finding(
        "audit.high_impermanent_loss",
        "High impermanent loss risk",
        Above("liquidityAnalysis", "impermanentLoss", 10),
    ),
    Rule(
        rule_id="audit.findings_require_mitigation",
        output=RECOMMENDATION,
        message="Immediate risk mitigation required",
        after_findings=True,
    ),
    recommendation(
        "audit.comprehensive_risk_management",
        "Implement comprehensive risk management",
        Above("riskAssessment", "totalRiskScore", 80),
    ),
    recommendation(
        "audit.shallow_liquidity",
        "Increase liquidity depth for better stability",
        Below("liquidityAnalysis", "liquidityDepth", 50),
    ),
)

AUDIT_REPORT = ReportDefinition(
    report_type="audit",
    title="Liquidity pool audit",
    directory="audit",
    file_prefix="liquidity-audit",
    groups=AUDIT_GROUPS,
    rules=AUDIT_RULES,
)
