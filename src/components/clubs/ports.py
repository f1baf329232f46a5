"""
Clubs component - Port interfaces.
"""

from __future__ import annotations

from src.core.ports.gateways import ClubGatewayPort

__all__ = ["ClubGatewayPort"]
