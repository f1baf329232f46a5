import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass

from src.rules.models import Rules

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GatewaySettings:
    base_url: str
    api_key: str
    functions_path: str
    timeout_seconds: float


def validate_ops_rules(rules: Rules, environ: Mapping[str, str] | None = None) -> None:
    """
    Validate operational requirements before startup.
    Exits with status 1 when required environment variables are missing.
    """
    env = os.environ if environ is None else environ

    missing = [name for name in rules.ops.required_env if not env.get(name)]
    if missing:
        print(
            f"CRITICAL: Missing required environment variables: {', '.join(missing)}",
            file=sys.stderr,
        )
        sys.exit(1)

    logger.debug("Configuration validated.")


def resolve_gateway_settings(
    rules: Rules,
    environ: Mapping[str, str] | None = None,
) -> GatewaySettings:
    """Read the endpoint URL and key from the variables named in rules.gateway."""
    env = os.environ if environ is None else environ
    gw = rules.gateway

    base_url = env.get(gw.base_url_env, "")
    api_key = env.get(gw.api_key_env, "")
    if not base_url or not api_key:
        raise ValueError(
            f"Gateway not configured: set {gw.base_url_env} and {gw.api_key_env}"
        )

    return GatewaySettings(
        base_url=base_url,
        api_key=api_key,
        functions_path=gw.functions_path,
        timeout_seconds=gw.timeout_seconds,
    )
