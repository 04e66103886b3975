"""
rules/security_rules.py

Security assessment, vulnerability scan, risk metrics and security controls.
"""

from __future__ import annotations

from metrics.types import GroupSpec
from rules.base import ReportDefinition, recommendation
from rules.predicates import Above, Below, IsFalse

SECURITY_REPORT = ReportDefinition(
    report_type="security",
    title="Liquidity pool security analysis",
    directory="security",
    file_prefix="liquidity-security",
    groups=(
        GroupSpec(
            "securityAssessment",
            {
                "securityScore": "number",
                "auditStatus": "text",
                "lastAudit": "timestamp",
                "securityGrade": "text",
                "riskLevel": "text",
            },
        ),
        GroupSpec(
            "vulnerabilityScan",
            {
                "criticalVulnerabilities": "number",
                "highVulnerabilities": "number",
                "mediumVulnerabilities": "number",
                "lowVulnerabilities": "number",
                "totalVulnerabilities": "number",
                "scanDate": "timestamp",
            },
        ),
        GroupSpec(
            "riskMetrics",
            {
                "totalRiskScore": "number",
                "financialRisk": "number",
                "operationalRisk": "number",
                "technicalRisk": "number",
                "regulatoryRisk": "number",
            },
        ),
        GroupSpec(
            "securityControls",
            {
                "accessControl": "bool",
                "encryption": "bool",
                "backupSystems": "bool",
                "monitoring": "bool",
                "incidentResponse": "bool",
            },
        ),
    ),
    rules=(
        recommendation(
            "security.low_security_score",
            "Improve overall security score",
            Below("securityAssessment", "securityScore", 75),
        ),
        recommendation(
            "security.critical_vulnerabilities",
            "Fix critical vulnerabilities immediately",
            Above("vulnerabilityScan", "criticalVulnerabilities", 0),
        ),
        recommendation(
            "security.high_total_risk",
            "Implement comprehensive risk mitigation strategies",
            Above("riskMetrics", "totalRiskScore", 70),
        ),
        recommendation(
            "security.missing_access_control",
            "Implement robust access control mechanisms",
            IsFalse("securityControls", "accessControl"),
        ),
    ),
)
