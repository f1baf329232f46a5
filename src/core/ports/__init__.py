# book-club-central - Ports (Protocol Interfaces)
# Abstract interfaces for adapters; no implementations here

from src.core.ports.gateways import (
    ClubGatewayPort,
    GatewayError,
    Gateways,
    MemberGatewayPort,
    Method,
    Resource,
    ServerGatewayPort,
    SessionGatewayPort,
)
from src.core.ports.time import ClockPort

__all__ = [
    # Gateways
    "ClubGatewayPort",
    "GatewayError",
    "Gateways",
    "MemberGatewayPort",
    "Method",
    "Resource",
    "ServerGatewayPort",
    "SessionGatewayPort",
    # Time
    "ClockPort",
]
