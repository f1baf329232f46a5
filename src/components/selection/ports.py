"""
Selection component - Port interfaces.
"""

from __future__ import annotations

from src.core.ports.gateways import ClubGatewayPort, ServerGatewayPort

__all__ = ["ClubGatewayPort", "ServerGatewayPort"]
