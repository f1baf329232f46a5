from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# --- Base ---


class GatewayModel(BaseModel):
    """Records returned by the remote endpoints carry extra columns we ignore."""

    model_config = ConfigDict(extra="ignore")


# --- Sessions & Discussions ---

class Book(GatewayModel):
    title: str
    author: str
    edition: str | None = None
    year: int | None = None
    isbn: str | None = None


class Discussion(GatewayModel):
    id: str
    title: str
    date: str  # ISO date or datetime, as stored
    location: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class Session(GatewayModel):
    id: str
    book: Book
    due_date: str
    discussions: list[Discussion] = Field(default_factory=list)


class SessionRef(GatewayModel):
    id: str
    due_date: str


# --- Members ---

class Member(GatewayModel):
    id: int
    name: str
    points: int = Field(default=0, ge=0)
    books_read: int = Field(default=0, ge=0)
    clubs: list[str] = Field(default_factory=list)


# Members embedded in a club record have the same shape as the member record
MemberRef = Member


# --- Clubs & Servers ---

class Club(GatewayModel):
    id: str
    name: str
    discord_channel: str | None = None
    server_id: str
    members: list[MemberRef] = Field(default_factory=list)
    active_session: Session | None = None
    past_sessions: list[SessionRef] = Field(default_factory=list)
    # Mastered here, not on Member
    shame_list: list[int] = Field(default_factory=list)

    def member_ids(self) -> set[int]:
        return {m.id for m in self.members}

    def get_member(self, member_id: int) -> MemberRef | None:
        return next((m for m in self.members if m.id == member_id), None)

    def stale_shame_ids(self) -> list[int]:
        """Shame list entries that no longer reference a member of this club."""
        members = self.member_ids()
        return [mid for mid in self.shame_list if mid not in members]


class ClubSummary(GatewayModel):
    id: str
    name: str
    discord_channel: str | None = None
    server_id: str | None = None


class Server(GatewayModel):
    id: str
    name: str
    clubs: list[ClubSummary] = Field(default_factory=list)

    def has_club(self, club_id: str) -> bool:
        return any(c.id == club_id for c in self.clubs)
