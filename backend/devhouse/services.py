"""Business logic services used by HTTP controllers.

This module holds one small service per resource plus the token
issuer. Services validate input, check that referenced rows exist,
persist through repositories and return transfer shapes from
`schemas`. Failures are raised as the exceptions defined here and
translated to HTTP responses by `main`.
"""

from datetime import datetime, timedelta, timezone
import logging
import uuid
import jwt
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session
from . import models, repositories, schemas
from .config import settings, Settings

logger = logging.getLogger("devhouse.services")

JWT_ALGORITHM = "HS256"
CLIENT_SUBJECT = "devhouse-api-client"


class ValidationError(ValueError):
    """Input rejected: missing field, bad reference or duplicate name."""


class NotFoundError(LookupError):
    """No row has the requested identity."""


class ConflictError(Exception):
    """The store refused a delete because other rows still reference it."""


def _is_blank(value) -> bool:
    return not isinstance(value, str) or not value.strip()


class AuthService:
    """Issue signed bearer tokens for API clients.

    Tokens identify a generic client rather than a user: they carry a
    fixed subject, a unique `jti`, the configured issuer/audience and an
    expiry. There is no revocation; a token is valid until it expires.
    """
    def __init__(self, config: Settings = settings):
        self.config = config

    def generate_token(self) -> str:
        expire = datetime.now(timezone.utc) + timedelta(minutes=self.config.JWT_EXPIRY_MINUTES)
        payload = {
            "sub": CLIENT_SUBJECT,
            "jti": str(uuid.uuid4()),
            "iss": self.config.JWT_ISSUER,
            "aud": self.config.JWT_AUDIENCE,
            "exp": int(expire.timestamp()),
        }
        return jwt.encode(payload, self.config.JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


class ResourceService:
    """Read and delete operations shared by every resource.

    Subclasses set `repository_class`, a human readable `label` used in
    messages, and implement `to_out` plus `create`/`update`.
    """
    repository_class = repositories.Repository
    label = "Resource"

    def __init__(self, session: Session):
        self.session = session
        self.repo = self.repository_class(session)

    def list(self):
        """Return all rows as transfer shapes (empty list when none)."""
        if not self.repo.is_available():
            raise NotFoundError(f"{self.label} store is not configured")
        return [self.to_out(entity) for entity in self.repo.list_all()]

    def get(self, entity_id: int):
        return self.to_out(self._require(entity_id))

    def delete(self, entity_id: int) -> None:
        """Remove a row; fails if absent or still referenced."""
        entity = self._require(entity_id)
        self.repo.remove(entity)
        try:
            self.repo.commit()
        except IntegrityError:
            logger.warning("delete refused: %s %s is still referenced", self.label, entity_id)
            raise ConflictError(f"{self.label} is still referenced by other records.")
        logger.info("deleted %s id=%s", self.label, entity_id)

    def to_out(self, entity):
        raise NotImplementedError

    def _require(self, entity_id: int):
        entity = self.repo.get(entity_id)
        if entity is None:
            raise NotFoundError(f"{self.label} not found")
        return entity

    def _reject(self, message: str) -> ValidationError:
        logger.warning("rejected %s write: %s", self.label, message)
        return ValidationError(message)

    def _save(self, entity, conflict_message: str):
        """Commit `entity` and reload it, mapping store conflicts to validation errors."""
        self.repo.add(entity)
        try:
            self.repo.commit()
        except IntegrityError:
            raise self._reject(conflict_message)
        return self.repo.refresh(entity)


class NamedResourceService(ResourceService):
    """Create/update for lookup tables whose only field is a unique name."""
    repository_class = repositories.NamedRepository
    model = None
    out_schema = schemas.NamedOut
    required_message = "Name is required."
    duplicate_message = "'{name}' already exists."

    def to_out(self, entity):
        return self.out_schema(id=entity.id, name=entity.name)

    def create(self, payload: schemas.NamedIn):
        self._validate(payload)
        entity = self._save(self.model(name=payload.name), self.duplicate_message.format(name=payload.name))
        logger.info("created %s id=%s", self.label, entity.id)
        return self.to_out(entity)

    def update(self, entity_id: int, payload: schemas.NamedIn):
        entity = self._require(entity_id)
        self._validate(payload, exclude_id=entity_id)
        entity.name = payload.name
        entity = self._save(entity, self.duplicate_message.format(name=payload.name))
        logger.info("updated %s id=%s", self.label, entity.id)
        return self.to_out(entity)

    def _validate(self, payload: schemas.NamedIn, exclude_id=None):
        if _is_blank(payload.name):
            raise self._reject(self.required_message)
        if self.repo.get_by_name(payload.name, exclude_id=exclude_id) is not None:
            raise self._reject(self.duplicate_message.format(name=payload.name))


class ProjectTypeService(NamedResourceService):
    repository_class = repositories.ProjectTypeRepository
    model = models.ProjectType
    out_schema = schemas.ProjectTypeOut
    label = "Project Type"
    required_message = "Project type name is required."
    duplicate_message = "Project type '{name}' already exists."


class TeamService(NamedResourceService):
    repository_class = repositories.TeamRepository
    model = models.Team
    out_schema = schemas.TeamOut
    label = "Team"
    required_message = "Invalid team data"
    duplicate_message = "A team with the name '{name}' already exists."


class RoleService(NamedResourceService):
    repository_class = repositories.RoleRepository
    model = models.Role
    out_schema = schemas.RoleOut
    label = "Role"
    required_message = "Invalid role data"
    duplicate_message = "Role '{name}' already exists."


class DeveloperService(ResourceService):
    """Developers belong to one team and hold one role."""
    repository_class = repositories.DeveloperRepository
    label = "Developer"
    invalid_reference_message = "Invalid TeamId or RoleId."

    def __init__(self, session: Session):
        super().__init__(session)
        self.team_repo = repositories.TeamRepository(session)
        self.role_repo = repositories.RoleRepository(session)

    def to_out(self, entity: models.Developer) -> schemas.DeveloperOut:
        return schemas.DeveloperOut(
            id=entity.id,
            firstname=entity.firstname,
            lastname=entity.lastname,
            role_id=entity.role_id,
            role_name=entity.role.name if entity.role else None,
            team_id=entity.team_id,
            team_name=entity.team.name if entity.team else None,
        )

    def create(self, payload: schemas.DeveloperIn) -> schemas.DeveloperOut:
        team, role = self._validate(payload)
        developer = models.Developer(
            firstname=payload.firstname,
            lastname=payload.lastname,
            role_id=role.id,
            team_id=team.id,
            role=role,
            team=team,
        )
        developer = self._save(developer, self.invalid_reference_message)
        logger.info("created %s id=%s", self.label, developer.id)
        return self.to_out(developer)

    def update(self, entity_id: int, payload: schemas.DeveloperIn) -> schemas.DeveloperOut:
        developer = self._require(entity_id)
        team, role = self._validate(payload)
        developer.firstname = payload.firstname
        developer.lastname = payload.lastname
        developer.role_id = role.id
        developer.team_id = team.id
        developer.role = role
        developer.team = team
        developer = self._save(developer, self.invalid_reference_message)
        logger.info("updated %s id=%s", self.label, developer.id)
        return self.to_out(developer)

    def _validate(self, payload: schemas.DeveloperIn):
        if _is_blank(payload.firstname) or _is_blank(payload.lastname):
            raise self._reject("Firstname and lastname are required.")
        if payload.team_id <= 0 or payload.role_id <= 0:
            raise self._reject(self.invalid_reference_message)
        team = self.team_repo.get(payload.team_id)
        role = self.role_repo.get(payload.role_id)
        if team is None or role is None:
            raise self._reject(self.invalid_reference_message)
        return team, role


class ProjectService(ResourceService):
    """Projects have a project type and are owned by a team."""
    repository_class = repositories.ProjectRepository
    label = "Project"

    def __init__(self, session: Session):
        super().__init__(session)
        self.team_repo = repositories.TeamRepository(session)
        self.project_type_repo = repositories.ProjectTypeRepository(session)

    def to_out(self, entity: models.Project) -> schemas.ProjectOut:
        return schemas.ProjectOut(
            id=entity.id,
            name=entity.name,
            project_type_id=entity.project_type_id,
            project_type_name=entity.project_type.name if entity.project_type else None,
            team_id=entity.team_id,
            team_name=entity.team.name if entity.team else None,
        )

    def create(self, payload: schemas.ProjectIn) -> schemas.ProjectOut:
        team, project_type = self._validate(payload)
        project = models.Project(
            name=payload.name,
            project_type_id=project_type.id,
            team_id=team.id,
            project_type=project_type,
            team=team,
        )
        project = self._save(project, "Invalid TeamId or ProjectTypeId.")
        logger.info("created %s id=%s", self.label, project.id)
        return self.to_out(project)

    def update(self, entity_id: int, payload: schemas.ProjectIn) -> schemas.ProjectOut:
        project = self._require(entity_id)
        team, project_type = self._validate(payload)
        project.name = payload.name
        project.project_type_id = project_type.id
        project.team_id = team.id
        project.project_type = project_type
        project.team = team
        project = self._save(project, "Invalid TeamId or ProjectTypeId.")
        logger.info("updated %s id=%s", self.label, project.id)
        return self.to_out(project)

    def _validate(self, payload: schemas.ProjectIn):
        if _is_blank(payload.name):
            raise self._reject("Project name is required.")
        if payload.team_id <= 0 or payload.project_type_id <= 0:
            raise self._reject("TeamId and ProjectTypeId must be valid positive numbers.")
        team = self.team_repo.get(payload.team_id)
        if team is None:
            raise self._reject("Invalid TeamId. Team does not exist.")
        project_type = self.project_type_repo.get(payload.project_type_id)
        if project_type is None:
            raise self._reject("Invalid ProjectTypeId. Project Type does not exist.")
        return team, project_type
