"""
Shame list component - Member save with shame list dual-write.

Shell Layer - handles gateway I/O and error conversion.

Steps:
1. Validate the form (no call on failure)
2. Member POST (new) or PUT (existing), without shame list data
3. Club PUT with the full replacement shame_list, only when the desired flag
   differs from the snapshot the form was opened with

Invariants:
- The club write is never issued if the member write failed
- A failed club write does not undo the member write; it is reported as a
  partial outcome naming the completed step
- Re-submitting the state already held in the snapshot issues no club write
"""

from __future__ import annotations

import logging

from src.core.ports.gateways import GatewayError
from src.domain.entities import Club

from ._impl import member_payload, plan_shame_list_write, plan_stale_prune, validate_member_form
from .models import PruneOutput, SaveMemberInput, SaveMemberOutput, ShameListError
from .ports import ClubGatewayPort, MemberGatewayPort

logger = logging.getLogger(__name__)


def run_save_member(
    inp: SaveMemberInput,
    snapshot: Club,
    *,
    members: MemberGatewayPort,
    clubs: ClubGatewayPort,
) -> SaveMemberOutput:
    """
    Create or update a member, then reconcile the club's shame list.

    Args:
        inp: Member form values and desired shame list flag.
        snapshot: Club record the form was opened with.
        members: Member gateway.
        clubs: Club gateway.

    Returns:
        SaveMemberOutput with outcome succeeded, partial or failed.
    """
    form, errors = validate_member_form(inp.name, inp.points, inp.books_read)
    if form is None:
        return SaveMemberOutput(
            outcome="failed",
            member=None,
            completed_steps=(),
            errors=tuple(errors),
        )

    verb = "create" if inp.is_new else "update"
    payload = member_payload(form, inp.member_id, snapshot.id)
    try:
        if inp.is_new:
            member = members.create(payload)
        else:
            member = members.update(payload)
    except GatewayError as e:
        logger.warning("Error %s member: %s", "creating" if inp.is_new else "updating", e)
        return SaveMemberOutput(
            outcome="failed",
            member=None,
            completed_steps=(),
            errors=(
                ShameListError(
                    code="gateway_error",
                    message=e.message or f"Failed to {verb} member",
                ),
            ),
        )

    # A new member's id is only known once the create call returns
    member_id = member.id if inp.is_new else inp.member_id
    assert member_id is not None

    new_list = plan_shame_list_write(snapshot.shame_list, member_id, inp.on_shame_list)
    if new_list is None:
        return SaveMemberOutput(
            outcome="succeeded",
            member=member,
            completed_steps=("member",),
            errors=(),
        )

    try:
        clubs.update(
            {"id": snapshot.id, "server_id": snapshot.server_id, "shame_list": new_list}
        )
    except GatewayError as e:
        logger.error(
            "Member %s saved but shame list update for club %s failed: %s",
            member_id,
            snapshot.id,
            e,
        )
        return SaveMemberOutput(
            outcome="partial",
            member=member,
            completed_steps=("member",),
            errors=(
                ShameListError(
                    code="shame_list_failed",
                    message=f"Member saved but shame list update failed: {e.message}",
                    field="on_shame_list",
                ),
            ),
            shame_list=tuple(new_list),
        )

    return SaveMemberOutput(
        outcome="succeeded",
        member=member,
        completed_steps=("member", "shame_list"),
        errors=(),
        shame_list=tuple(new_list),
        club_written=True,
    )


def run_prune_shame_list(
    snapshot: Club,
    *,
    clubs: ClubGatewayPort,
) -> PruneOutput:
    """Drop shame list ids of members no longer in the club (one club PUT)."""
    new_list = plan_stale_prune(snapshot)
    if new_list is None:
        return PruneOutput(removed_ids=(), errors=(), success=True)

    removed = tuple(mid for mid in snapshot.shame_list if mid not in new_list)
    try:
        clubs.update(
            {"id": snapshot.id, "server_id": snapshot.server_id, "shame_list": new_list}
        )
    except GatewayError as e:
        logger.warning("Error pruning shame list of club %s: %s", snapshot.id, e)
        return PruneOutput(
            removed_ids=(),
            errors=(
                ShameListError(
                    code="gateway_error",
                    message=e.message or "Failed to update shame list",
                ),
            ),
            success=False,
        )

    logger.info("Pruned stale shame list ids %s from club %s", removed, snapshot.id)
    return PruneOutput(removed_ids=removed, errors=(), success=True)
