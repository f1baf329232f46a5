"""
Services - orchestration above the atomic components in src/components/.
"""

from src.services.dashboard import ClubDashboard, NoClubSelectedError

__all__ = ["ClubDashboard", "NoClubSelectedError"]
