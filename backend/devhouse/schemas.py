"""Pydantic request/response schemas used by the API.

Schemas keep API input/output shapes stable. JSON keys are camelCase
(`teamId`, `projectTypeName`) while Python attributes stay snake_case.
Input fields default to empty values so that a missing field is
reported by service validation with a descriptive message.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional


class ApiModel(BaseModel):
    """Base model mapping snake_case attributes to camelCase JSON keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TokenOut(ApiModel):
    """Authentication response containing a bearer token."""
    token: str


class NamedIn(ApiModel):
    """Request body shared by project types, teams and roles."""
    name: str = ""


class NamedOut(ApiModel):
    """Transfer shape for project types, teams and roles."""
    id: int
    name: str


class ProjectTypeIn(NamedIn):
    pass


class ProjectTypeOut(NamedOut):
    pass


class TeamIn(NamedIn):
    pass


class TeamOut(NamedOut):
    pass


class RoleIn(NamedIn):
    pass


class RoleOut(NamedOut):
    pass


class DeveloperIn(ApiModel):
    """Request body for creating or replacing a developer."""
    firstname: str = ""
    lastname: str = ""
    role_id: int = 0
    team_id: int = 0


class DeveloperOut(ApiModel):
    """Developer transfer shape with role and team names resolved."""
    id: int
    firstname: str
    lastname: str
    role_id: int
    role_name: Optional[str] = None
    team_id: int
    team_name: Optional[str] = None


class ProjectIn(ApiModel):
    """Request body for creating or replacing a project."""
    name: str = ""
    project_type_id: int = 0
    team_id: int = 0


class ProjectOut(ApiModel):
    """Project transfer shape with project type and team names resolved."""
    id: int
    name: str
    project_type_id: int
    project_type_name: Optional[str] = None
    team_id: int
    team_name: Optional[str] = None
