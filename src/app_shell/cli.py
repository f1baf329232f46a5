import argparse
import logging
import sys
from pathlib import Path

from src.adapters.edge_functions import create_edge_function_gateways
from src.adapters.memory_gateways import build_demo_backend
from src.app_shell.config import resolve_gateway_settings, validate_ops_rules
from src.components.discussions import is_past
from src.components.shame_list import SaveMemberInput
from src.core.ports.gateways import Gateways
from src.rules.loader import load_rules
from src.services.dashboard import ClubDashboard

logger = logging.getLogger("cli")

RULES_PATH = "rules.yaml"

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_PARTIAL = 2


def get_gateways(args: argparse.Namespace) -> Gateways:
    if args.demo:
        return build_demo_backend().gateways()

    rules_path = Path(args.rules)
    if not rules_path.exists():
        logger.error("Rules file %s not found.", rules_path)
        sys.exit(EXIT_FAILED)

    rules = load_rules(rules_path)
    if not args.verbose:
        logging.getLogger().setLevel(rules.ops.log_level.upper())
    validate_ops_rules(rules)
    settings = resolve_gateway_settings(rules)
    return create_edge_function_gateways(
        settings.base_url,
        settings.api_key,
        functions_path=settings.functions_path,
        timeout=settings.timeout_seconds,
    )


def open_dashboard(args: argparse.Namespace, gateways: Gateways) -> ClubDashboard:
    dashboard = ClubDashboard(gateways)
    dashboard.load()
    if args.server:
        dashboard.select_server(args.server)
    if dashboard.state.error:
        print(f"Error: {dashboard.state.error}", file=sys.stderr)
        sys.exit(EXIT_FAILED)
    return dashboard


def open_club(args: argparse.Namespace, gateways: Gateways) -> ClubDashboard:
    dashboard = open_dashboard(args, gateways)
    if not dashboard.select_club(args.club_id).success:
        print(f"Error: {dashboard.state.error}", file=sys.stderr)
        sys.exit(EXIT_FAILED)
    return dashboard


def finish(dashboard: ClubDashboard, output: object, done: str) -> int:
    outcome = getattr(output, "outcome", None)
    if outcome == "partial":
        print(f"Partial failure: {dashboard.state.error}", file=sys.stderr)
        return EXIT_PARTIAL
    if not getattr(output, "success", False):
        print(f"Error: {dashboard.state.error}", file=sys.stderr)
        return EXIT_FAILED
    print(done)
    return EXIT_OK


# --- Commands ---


def handle_servers(args: argparse.Namespace, gateways: Gateways) -> int:
    dashboard = open_dashboard(args, gateways)
    for server in dashboard.state.servers:
        marker = "*" if server.id == dashboard.state.server_id else " "
        print(f"{marker} {server.name} ({server.id}) - {len(server.clubs)} clubs")
        for club in server.clubs:
            channel = f" #{club.discord_channel}" if club.discord_channel else ""
            print(f"    {club.name} ({club.id}){channel}")
    return EXIT_OK


def handle_club(args: argparse.Namespace, gateways: Gateways) -> int:
    dashboard = open_club(args, gateways)
    club = dashboard.state.club
    assert club is not None

    print(f"{club.name} ({club.id}) on server {club.server_id}")
    if club.discord_channel:
        print(f"Discord: #{club.discord_channel}")

    session = club.active_session
    if session:
        book = session.book
        year = f", {book.year}" if book.year else ""
        print(f"\nReading: {book.title} by {book.author}{year} - due {session.due_date}")
        discussions = dashboard.sorted_discussions()
        print(f"Discussion Timeline ({len(discussions)})")
        now = dashboard.clock.now()
        for d in discussions:
            state = "past" if is_past(d, now) else "upcoming"
            where = f" @ {d.location}" if d.location else ""
            print(f"  [{state}] {d.date} {d.title}{where} ({d.id})")
    else:
        print("\nNo active session")

    flags = dashboard.shame_flags()
    print(f"\nMembers ({len(club.members)})")
    for m in club.members:
        shame = " [shame list]" if flags.get(m.id) else ""
        print(f"  {m.id}: {m.name} - {m.points} pts, {m.books_read} books{shame}")

    stale = club.stale_shame_ids()
    if stale:
        print(f"\nShame list holds ids of former members: {stale}")
    return EXIT_OK


def handle_add_member(args: argparse.Namespace, gateways: Gateways) -> int:
    dashboard = open_club(args, gateways)
    output = dashboard.save_member(
        SaveMemberInput(
            name=args.name,
            points=args.points,
            books_read=args.books_read,
            on_shame_list=args.shame,
        )
    )
    member_id = output.member.id if output.member else None
    return finish(dashboard, output, f"Member saved ({member_id}).")


def handle_edit_member(args: argparse.Namespace, gateways: Gateways) -> int:
    dashboard = open_club(args, gateways)
    club = dashboard.state.club
    assert club is not None
    existing = club.get_member(args.member_id)
    if existing is None:
        print(f"Error: member {args.member_id} is not in club {club.id}", file=sys.stderr)
        return EXIT_FAILED

    shame = args.shame if args.shame is not None else args.member_id in club.shame_list
    output = dashboard.save_member(
        SaveMemberInput(
            name=args.name if args.name is not None else existing.name,
            points=args.points if args.points is not None else existing.points,
            books_read=args.books_read if args.books_read is not None else existing.books_read,
            on_shame_list=shame,
            member_id=existing.id,
        )
    )
    return finish(dashboard, output, "Member updated.")


def handle_add_discussion(args: argparse.Namespace, gateways: Gateways) -> int:
    dashboard = open_club(args, gateways)
    output = dashboard.add_discussion(args.title, args.date, args.location)
    return finish(dashboard, output, f"Discussion added ({output.discussion_id}).")


def handle_delete_discussion(args: argparse.Namespace, gateways: Gateways) -> int:
    dashboard = open_club(args, gateways)
    output = dashboard.delete_discussion(args.discussion_id)
    return finish(dashboard, output, "Discussion deleted.")


def handle_create_club(args: argparse.Namespace, gateways: Gateways) -> int:
    dashboard = open_dashboard(args, gateways)
    output = dashboard.create_club(args.name, args.discord_channel)
    return finish(dashboard, output, f"Club created ({output.club_id}).")


def handle_delete_club(args: argparse.Namespace, gateways: Gateways) -> int:
    dashboard = open_dashboard(args, gateways)
    output = dashboard.delete_club(args.club_id)
    return finish(dashboard, output, "Club deleted.")


def handle_prune_shame_list(args: argparse.Namespace, gateways: Gateways) -> int:
    dashboard = open_club(args, gateways)
    output = dashboard.prune_shame_list()
    return finish(dashboard, output, f"Removed stale ids: {list(output.removed_ids)}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Book Club Central admin CLI")
    parser.add_argument("--rules", default=RULES_PATH, help="Path to rules.yaml")
    parser.add_argument("--server", help="Server id (default: first server)")
    parser.add_argument("--demo", action="store_true", help="Use seeded in-memory data")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("servers", help="List servers and their clubs")

    club_parser = subparsers.add_parser("club", help="Show a club")
    club_parser.add_argument("club_id")

    add_member = subparsers.add_parser("add-member", help="Add a member to a club")
    add_member.add_argument("club_id")
    add_member.add_argument("--name", required=True)
    add_member.add_argument("--points", default="0")
    add_member.add_argument("--books-read", default="0")
    add_member.add_argument("--shame", action="store_true", help="Put on the shame list")

    edit_member = subparsers.add_parser("edit-member", help="Edit a club member")
    edit_member.add_argument("club_id")
    edit_member.add_argument("member_id", type=int)
    edit_member.add_argument("--name")
    edit_member.add_argument("--points")
    edit_member.add_argument("--books-read")
    edit_member.add_argument("--shame", action=argparse.BooleanOptionalAction, default=None)

    add_disc = subparsers.add_parser("add-discussion", help="Add a discussion")
    add_disc.add_argument("club_id")
    add_disc.add_argument("--title", required=True)
    add_disc.add_argument("--date", required=True, help="YYYY-MM-DD")
    add_disc.add_argument("--location")

    del_disc = subparsers.add_parser("delete-discussion", help="Delete a discussion")
    del_disc.add_argument("club_id")
    del_disc.add_argument("discussion_id")

    create_club = subparsers.add_parser("create-club", help="Create a club")
    create_club.add_argument("--name", required=True)
    create_club.add_argument("--discord-channel")

    del_club = subparsers.add_parser("delete-club", help="Delete a club")
    del_club.add_argument("club_id")

    prune = subparsers.add_parser("prune-shame-list", help="Drop ids of former members")
    prune.add_argument("club_id")

    return parser


HANDLERS = {
    "servers": handle_servers,
    "club": handle_club,
    "add-member": handle_add_member,
    "edit-member": handle_edit_member,
    "add-discussion": handle_add_discussion,
    "delete-discussion": handle_delete_discussion,
    "create-club": handle_create_club,
    "delete-club": handle_delete_club,
    "prune-shame-list": handle_prune_shame_list,
}


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    with get_gateways(args) as gateways:
        return HANDLERS[args.command](args, gateways)


if __name__ == "__main__":
    sys.exit(main())
