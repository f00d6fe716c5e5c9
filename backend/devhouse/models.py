"""SQLModel data models.

This module defines the organisation tables using SQLModel. Lookup
tables (project types, teams, roles) carry a unique `name`; developers
and projects reference them through plain foreign keys.

Relationships use `passive_deletes="all"` so that deleting a parent
never rewrites its children's foreign keys; the database rejects the
delete instead while children still reference it.
"""

from typing import List, Optional
from sqlmodel import SQLModel, Field, Relationship

_KEEP_CHILDREN = {"passive_deletes": "all"}


class ProjectType(SQLModel, table=True):
    """A category of project (e.g. "Web", "Mobile")."""
    __tablename__ = "project_types"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True, unique=True, nullable=False)
    projects: List["Project"] = Relationship(back_populates="project_type", sa_relationship_kwargs=_KEEP_CHILDREN)


class Team(SQLModel, table=True):
    """A team owning projects and grouping developers."""
    __tablename__ = "teams"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True, unique=True, nullable=False)
    projects: List["Project"] = Relationship(back_populates="team", sa_relationship_kwargs=_KEEP_CHILDREN)
    developers: List["Developer"] = Relationship(back_populates="team", sa_relationship_kwargs=_KEEP_CHILDREN)


class Role(SQLModel, table=True):
    """A developer role such as "Backend Engineer"."""
    __tablename__ = "roles"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True, unique=True, nullable=False)
    developers: List["Developer"] = Relationship(back_populates="role", sa_relationship_kwargs=_KEEP_CHILDREN)


class Developer(SQLModel, table=True):
    """A developer assigned to exactly one team with one role."""
    __tablename__ = "developers"

    id: Optional[int] = Field(default=None, primary_key=True)
    firstname: str = Field(nullable=False)
    lastname: str = Field(nullable=False)
    role_id: int = Field(foreign_key="roles.id", index=True)
    team_id: int = Field(foreign_key="teams.id", index=True)
    role: Optional[Role] = Relationship(back_populates="developers")
    team: Optional[Team] = Relationship(back_populates="developers")


class Project(SQLModel, table=True):
    """A project of a given type, owned by a team."""
    __tablename__ = "projects"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False)
    project_type_id: int = Field(foreign_key="project_types.id", index=True)
    team_id: int = Field(foreign_key="teams.id", index=True)
    project_type: Optional[ProjectType] = Relationship(back_populates="projects")
    team: Optional[Team] = Relationship(back_populates="projects")
