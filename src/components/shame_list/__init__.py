"""
Shame list component - Member saves and the club-mastered shame list.
"""

from ._impl import (
    is_on_shame_list,
    member_payload,
    plan_shame_list_write,
    plan_stale_prune,
    validate_member_form,
)
from .component import run_prune_shame_list, run_save_member
from .models import (
    MemberForm,
    PruneOutput,
    SaveMemberInput,
    SaveMemberOutput,
    SaveOutcome,
    ShameListError,
    WriteStep,
)
from .ports import ClubGatewayPort, MemberGatewayPort

__all__ = [
    # Entry points
    "run_save_member",
    "run_prune_shame_list",
    # Functional core
    "is_on_shame_list",
    "member_payload",
    "plan_shame_list_write",
    "plan_stale_prune",
    "validate_member_form",
    # Models
    "MemberForm",
    "SaveMemberInput",
    "SaveMemberOutput",
    "SaveOutcome",
    "WriteStep",
    "PruneOutput",
    "ShameListError",
    # Ports
    "ClubGatewayPort",
    "MemberGatewayPort",
]
