"""
Sessions component - Port interfaces.
"""

from __future__ import annotations

from src.core.ports.gateways import SessionGatewayPort
from src.core.ports.time import ClockPort

__all__ = ["ClockPort", "SessionGatewayPort"]
