"""Repository classes encapsulating database operations.

Each repository wraps a `Session` and is focused on a single table.
Repositories never commit on their own: services stage changes with
`add`/`remove` and close the unit of work with `commit`, which lets a
service check several tables before deciding to write anything.
"""

from typing import List, Optional
from sqlalchemy import inspect
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select
from . import models

# Widest value a 64-bit INTEGER primary key can hold.
MAX_ID = 2 ** 63 - 1


class Repository:
    """Generic lookups and unit-of-work helpers for one table class."""
    model = None

    def __init__(self, session: Session):
        self.session = session

    def is_available(self) -> bool:
        """Return True if the backing table exists in the database."""
        return inspect(self.session.get_bind()).has_table(self.model.__tablename__)

    def get(self, entity_id: int):
        """Fetch a row by primary key or `None` if absent.

        Ids outside the INTEGER range cannot exist, so they are treated
        as absent instead of being sent to the database.
        """
        if not -MAX_ID - 1 <= entity_id <= MAX_ID:
            return None
        return self.session.get(self.model, entity_id)

    def find_one(self, *conditions):
        """Return the first row matching every condition, or `None`."""
        stmt = select(self.model).where(*conditions)
        return self.session.exec(stmt).first()

    def list_all(self) -> List:
        """Return every row ordered by id."""
        stmt = select(self.model).options(*self._load_options()).order_by(self.model.id)
        return self.session.exec(stmt).all()

    def add(self, entity):
        self.session.add(entity)
        return entity

    def remove(self, entity):
        self.session.delete(entity)

    def commit(self):
        """Flush staged changes; the session is rolled back on failure."""
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    def refresh(self, entity):
        self.session.refresh(entity)
        return entity

    def _load_options(self):
        return ()


class NamedRepository(Repository):
    """Lookups for tables keyed by a unique `name`."""

    def get_by_name(self, name: str, exclude_id: Optional[int] = None):
        """Return the row named `name`, skipping `exclude_id` if given."""
        conditions = [self.model.name == name]
        if exclude_id is not None:
            conditions.append(self.model.id != exclude_id)
        return self.find_one(*conditions)


class ProjectTypeRepository(NamedRepository):
    model = models.ProjectType


class TeamRepository(NamedRepository):
    model = models.Team


class RoleRepository(NamedRepository):
    model = models.Role


class DeveloperRepository(Repository):
    """Developers are listed with their role and team eagerly loaded."""
    model = models.Developer

    def _load_options(self):
        return (selectinload(models.Developer.role), selectinload(models.Developer.team))


class ProjectRepository(Repository):
    """Projects are listed with their project type and team eagerly loaded."""
    model = models.Project

    def _load_options(self):
        return (selectinload(models.Project.project_type), selectinload(models.Project.team))
