"""
Shame list component - Port interfaces.
"""

from __future__ import annotations

from src.core.ports.gateways import ClubGatewayPort, MemberGatewayPort

__all__ = ["ClubGatewayPort", "MemberGatewayPort"]
