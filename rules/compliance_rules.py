"""
rules/compliance_rules.py

Regulatory, legal, security-standard and liquidity compliance checks.
"""

from __future__ import annotations

from metrics.types import GroupSpec
from rules.base import ReportDefinition, recommendation
from rules.predicates import Below, IsFalse

COMPLIANCE_REPORT = ReportDefinition(
    report_type="compliance",
    title="Liquidity pool compliance check",
    directory="compliance",
    file_prefix="liquidity-compliance",
    groups=(
        GroupSpec(
            "complianceStatus",
            {
                "regulatoryCompliance": "bool",
                "legalCompliance": "bool",
                "financialCompliance": "bool",
                "technicalCompliance": "bool",
                "overallScore": "number",
            },
        ),
        GroupSpec(
            "regulatoryRequirements",
            {
                "licensing": "bool",
                "KYC": "bool",
                "AML": "bool",
                "liquidityRequirements": "bool",
                "investorProtection": "bool",
            },
        ),
        GroupSpec(
            "securityStandards",
            {
                "codeAudits": "bool",
                "accessControl": "bool",
                "securityTesting": "bool",
                "incidentResponse": "bool",
                "backupSystems": "bool",
            },
        ),
        GroupSpec(
            "liquidityCompliance",
            {
                "minimumLiquidity": "bool",
                "liquidityRatio": "json",
                "slippageControl": "bool",
                "priceStability": "bool",
                "riskManagement": "bool",
            },
        ),
    ),
    rules=(
        recommendation(
            "compliance.low_overall_score",
            "Improve compliance with liquidity requirements",
            Below("complianceStatus", "overallScore", 85),
        ),
        recommendation(
            "compliance.missing_aml",
            "Implement AML procedures for liquidity pool",
            IsFalse("regulatoryRequirements", "AML"),
        ),
        recommendation(
            "compliance.missing_code_audits",
            "Conduct regular code audits for liquidity pool",
            IsFalse("securityStandards", "codeAudits"),
        ),
        recommendation(
            "compliance.below_minimum_liquidity",
            "Maintain minimum liquidity requirements",
            IsFalse("liquidityCompliance", "minimumLiquidity"),
        ),
    ),
)
