"""
app/deployments.py

Pool address resolution and deployment metadata.

The deploy scripts write one of two JSON shapes:

    {"network": ..., "chainId": ..., "deployer": ...,
     "contracts": {"LiquidityPool": ..., "Token0": ..., "Token1": ...}}

    {"pool": ..., "token1": ..., "token2": ..., "owner": ...}

Both are accepted. An explicitly configured address always wins over the
deployment file.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from app.config import ReportSettings
from pipeline.errors import ConfigurationError
from reporting.schema import DeploymentMetadata

logger = logging.getLogger(__name__)

ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def validate_address(address: str) -> str:
    """
    Return *address* stripped, or raise ConfigurationError if it is not a
    20-byte hex address. Placeholders such as ``0x...`` are rejected.
    """

    candidate = address.strip()
    if not ADDRESS_RE.match(candidate):
        raise ConfigurationError(
            f"'{candidate}' is not a valid pool address; expected 0x followed by 40 hex digits."
        )
    return candidate


def _from_payload(data: dict[str, Any]) -> DeploymentMetadata:
    contracts = data.get("contracts")
    if isinstance(contracts, dict):
        return DeploymentMetadata(
            network=data.get("network"),
            chain_id=data.get("chainId"),
            deployer=data.get("deployer"),
            pool=contracts.get("LiquidityPool"),
            token0=contracts.get("Token0"),
            token1=contracts.get("Token1"),
        )
    return DeploymentMetadata(
        deployer=data.get("owner"),
        pool=data.get("pool"),
        token0=data.get("token1"),
        token1=data.get("token2"),
    )


def load_deployment(path: str | Path) -> DeploymentMetadata | None:
    """
    Load deployment metadata, or return None when the file does not exist.

    Raises ConfigurationError if the file exists but cannot be parsed.
    """

    deployment_path = Path(path)
    if not deployment_path.exists():
        return None

    try:
        data = json.loads(deployment_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"Cannot read deployment file {deployment_path}.") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Deployment file {deployment_path} must contain a JSON object.")

    try:
        return _from_payload(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Deployment file {deployment_path} is invalid: {exc}") from exc


def resolve_subject(
    settings: ReportSettings,
    explicit_address: str | None = None,
) -> tuple[str, DeploymentMetadata | None]:
    """
    Decide which pool to report on.

    Priority:
    1) *explicit_address* (command line)
    2) POOL_ADDRESS
    3) the pool recorded in the deployment file

    Returns the validated address and the deployment metadata for that
    pool. Metadata recorded for a different pool is not returned.
    """

    deployment = load_deployment(settings.deployments_file)

    address = explicit_address or settings.pool_address
    if address:
        subject_id = validate_address(address)
        if deployment is not None and (deployment.pool or "").lower() != subject_id.lower():
            logger.warning(
                "Ignoring deployment file %s: it records pool %s, not %s",
                settings.deployments_file,
                deployment.pool,
                subject_id,
            )
            return subject_id, None
        return subject_id, deployment

    if deployment is not None and deployment.pool:
        logger.info("Using pool address from deployment file %s", settings.deployments_file)
        return validate_address(deployment.pool), deployment

    raise ConfigurationError(
        "No pool address configured. Pass --subject, set POOL_ADDRESS, "
        f"or provide a deployment file at {settings.deployments_file}."
    )
