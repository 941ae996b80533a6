"""Viewer role and visibility resolution.

Everything here is a pure function of its inputs. Roles are recomputed on every
request from raw identity comparisons and never cached, so membership changes
take effect immediately.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from uuid import UUID

from src.projecthub.models import Project, ProjectMember


@dataclass(frozen=True)
class ViewerRole:
    """Capabilities of the caller with respect to one project."""

    is_owner: bool = False
    is_mentor: bool = False
    is_member: bool = False
    has_applied: bool = False
    application_status: str | None = None

    @property
    def is_team(self) -> bool:
        """Owner, mentor or member."""
        return self.is_owner or self.is_mentor or self.is_member


def resolve_viewer_role(
    project: Project,
    members: Iterable[ProjectMember],
    caller_id: UUID | None,
) -> ViewerRole:
    """Derive owner/mentor/member flags for the caller. Anonymous callers get none."""
    if caller_id is None:
        return ViewerRole()
    return ViewerRole(
        is_owner=caller_id == project.initiator_id,
        is_mentor=project.final_mentor_id is not None and caller_id == project.final_mentor_id,
        is_member=any(m.user_id == caller_id for m in members),
    )


def can_view(project: Project, role: ViewerRole) -> bool:
    """Open projects are public; every other status is private to the team."""
    return project.is_open or role.is_team


def should_lookup_own_application(role: ViewerRole) -> bool:
    """Only outsiders (not owner, not member) have an application to report.

    Anonymous callers hold no role either; callers check authentication first.
    """
    return not role.is_owner and not role.is_member
