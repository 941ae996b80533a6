"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import ProfileFactory, ProjectFactory, ...
"""

from tests.factories.base import BaseFactory, generate_uuid, utc_now
from tests.factories.planning import MilestoneFactory, TaskFactory
from tests.factories.profile import ProfileFactory
from tests.factories.project import (
    ProjectApplicationFactory,
    ProjectFactory,
    ProjectFileFactory,
    ProjectMemberFactory,
)

__all__ = [
    # Base
    "BaseFactory",
    "generate_uuid",
    "utc_now",
    # Planning
    "MilestoneFactory",
    "TaskFactory",
    # Profile
    "ProfileFactory",
    # Project
    "ProjectApplicationFactory",
    "ProjectFactory",
    "ProjectFileFactory",
    "ProjectMemberFactory",
]
