"""FastAPI application entrypoint and HTTP controllers.

This module defines the HTTP endpoints of the DevHouse API. Controllers
are intentionally thin: they accept requests, delegate to services, and
return JSON responses. Reads are public; every POST/PUT/DELETE on a
resource requires a bearer token from `POST /api/Auth/token`.

Endpoints implemented (each resource also has GET/DELETE on `/{id}`):
- POST /api/Auth/token
- GET, POST /api/ProjectType ; PUT /api/ProjectType/updateprojecttype/{id}
- GET, POST /api/Team ; PUT /api/Team/{id}
- GET, POST /api/Role ; PUT /api/Role/{id}
- GET, POST /api/Developer ; PUT /api/Developer/{id}
- GET, POST /api/Project ; PUT /api/Project/{id}
- GET /health
"""

from typing import List
from fastapi import FastAPI, Depends, Request
from fastapi.responses import JSONResponse, Response
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session
import os
import json
import logging
import time
import uuid
from .database import create_db_and_tables, get_session
from . import services, schemas
from .auth import require_client
from .config import settings

app = FastAPI(title="DevHouse API", description="Web API to manage the DevHouse company")
logger = logging.getLogger("devhouse.api")
if not logger.handlers:
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))

if settings.ALLOW_DEV_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

create_db_and_tables()


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    response: Response
    try:
        response = await call_next(request)
    except Exception:
        elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
        logger.exception(
            "request_failed %s",
            json.dumps(
                {
                    "request_id": req_id,
                    "path": request.url.path,
                    "method": request.method,
                    "duration_ms": elapsed_ms,
                    "client": request.client.host if request.client else "unknown",
                },
                ensure_ascii=True,
            ),
        )
        raise
    response.headers["X-Request-ID"] = req_id
    elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
    if request.url.path.startswith("/api"):
        logger.info(
            "request_done %s",
            json.dumps(
                {
                    "request_id": req_id,
                    "path": request.url.path,
                    "method": request.method,
                    "status_code": response.status_code,
                    "duration_ms": elapsed_ms,
                    "client": request.client.host if request.client else "unknown",
                },
                ensure_ascii=True,
            ),
        )
    return response


@app.exception_handler(services.ValidationError)
async def validation_error_handler(request: Request, exc: services.ValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(services.NotFoundError)
async def not_found_handler(request: Request, exc: services.NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(services.ConflictError)
async def conflict_handler(request: Request, exc: services.ConflictError):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


def _created(response: Response, request: Request, route_name: str, **path_params) -> None:
    response.headers["Location"] = str(request.url_for(route_name, **path_params))


@app.get("/health")
def health():
    """Lightweight health check for uptime monitoring."""
    return {"status": "ok"}


@app.post('/api/Auth/token', response_model=schemas.TokenOut)
def generate_token():
    """Mint a bearer token for a generic API client."""
    return schemas.TokenOut(token=services.AuthService().generate_token())


# Project types

@app.get('/api/ProjectType', response_model=List[schemas.ProjectTypeOut])
def list_project_types(db: Session = Depends(get_session)):
    return services.ProjectTypeService(db).list()


@app.get('/api/ProjectType/{project_type_id}', response_model=schemas.ProjectTypeOut)
def get_project_type(project_type_id: int, db: Session = Depends(get_session)):
    return services.ProjectTypeService(db).get(project_type_id)


@app.post('/api/ProjectType', status_code=201, response_model=schemas.ProjectTypeOut)
def create_project_type(payload: schemas.ProjectTypeIn, request: Request, response: Response,
                        db: Session = Depends(get_session), client: dict = Depends(require_client)):
    """Create a project type; names must be unique."""
    out = services.ProjectTypeService(db).create(payload)
    _created(response, request, 'get_project_type', project_type_id=out.id)
    return out


@app.put('/api/ProjectType/updateprojecttype/{project_type_id}', response_model=schemas.ProjectTypeOut)
def update_project_type(project_type_id: int, payload: schemas.ProjectTypeIn,
                        db: Session = Depends(get_session), client: dict = Depends(require_client)):
    return services.ProjectTypeService(db).update(project_type_id, payload)


@app.delete('/api/ProjectType/{project_type_id}', status_code=204)
def delete_project_type(project_type_id: int, db: Session = Depends(get_session), client: dict = Depends(require_client)):
    services.ProjectTypeService(db).delete(project_type_id)
    return Response(status_code=204)


# Teams

@app.get('/api/Team', response_model=List[schemas.TeamOut])
def list_teams(db: Session = Depends(get_session)):
    return services.TeamService(db).list()


@app.get('/api/Team/{team_id}', response_model=schemas.TeamOut)
def get_team(team_id: int, db: Session = Depends(get_session)):
    return services.TeamService(db).get(team_id)


@app.post('/api/Team', status_code=201, response_model=schemas.TeamOut)
def create_team(payload: schemas.TeamIn, request: Request, response: Response,
                db: Session = Depends(get_session), client: dict = Depends(require_client)):
    """Create a team; names must be unique."""
    out = services.TeamService(db).create(payload)
    _created(response, request, 'get_team', team_id=out.id)
    return out


@app.put('/api/Team/{team_id}', response_model=schemas.TeamOut)
def update_team(team_id: int, payload: schemas.TeamIn,
                db: Session = Depends(get_session), client: dict = Depends(require_client)):
    return services.TeamService(db).update(team_id, payload)


@app.delete('/api/Team/{team_id}', status_code=204)
def delete_team(team_id: int, db: Session = Depends(get_session), client: dict = Depends(require_client)):
    services.TeamService(db).delete(team_id)
    return Response(status_code=204)


# Roles

@app.get('/api/Role', response_model=List[schemas.RoleOut])
def list_roles(db: Session = Depends(get_session)):
    return services.RoleService(db).list()


@app.get('/api/Role/{role_id}', response_model=schemas.RoleOut)
def get_role(role_id: int, db: Session = Depends(get_session)):
    return services.RoleService(db).get(role_id)


@app.post('/api/Role', status_code=201, response_model=schemas.RoleOut)
def create_role(payload: schemas.RoleIn, request: Request, response: Response,
                db: Session = Depends(get_session), client: dict = Depends(require_client)):
    """Create a role; names must be unique."""
    out = services.RoleService(db).create(payload)
    _created(response, request, 'get_role', role_id=out.id)
    return out


@app.put('/api/Role/{role_id}', response_model=schemas.RoleOut)
def update_role(role_id: int, payload: schemas.RoleIn,
                db: Session = Depends(get_session), client: dict = Depends(require_client)):
    return services.RoleService(db).update(role_id, payload)


@app.delete('/api/Role/{role_id}', status_code=204)
def delete_role(role_id: int, db: Session = Depends(get_session), client: dict = Depends(require_client)):
    services.RoleService(db).delete(role_id)
    return Response(status_code=204)


# Developers

@app.get('/api/Developer', response_model=List[schemas.DeveloperOut])
def list_developers(db: Session = Depends(get_session)):
    """List developers with their role and team names."""
    return services.DeveloperService(db).list()


@app.get('/api/Developer/{developer_id}', response_model=schemas.DeveloperOut)
def get_developer(developer_id: int, db: Session = Depends(get_session)):
    return services.DeveloperService(db).get(developer_id)


@app.post('/api/Developer', status_code=201, response_model=schemas.DeveloperOut)
def create_developer(payload: schemas.DeveloperIn, request: Request, response: Response,
                     db: Session = Depends(get_session), client: dict = Depends(require_client)):
    """Create a developer; `roleId` and `teamId` must reference existing rows."""
    out = services.DeveloperService(db).create(payload)
    _created(response, request, 'get_developer', developer_id=out.id)
    return out


@app.put('/api/Developer/{developer_id}', response_model=schemas.DeveloperOut)
def update_developer(developer_id: int, payload: schemas.DeveloperIn,
                     db: Session = Depends(get_session), client: dict = Depends(require_client)):
    return services.DeveloperService(db).update(developer_id, payload)


@app.delete('/api/Developer/{developer_id}', status_code=204)
def delete_developer(developer_id: int, db: Session = Depends(get_session), client: dict = Depends(require_client)):
    services.DeveloperService(db).delete(developer_id)
    return Response(status_code=204)


# Projects

@app.get('/api/Project', response_model=List[schemas.ProjectOut])
def list_projects(db: Session = Depends(get_session)):
    """List projects with their project type and team names."""
    return services.ProjectService(db).list()


@app.get('/api/Project/{project_id}', response_model=schemas.ProjectOut)
def get_project(project_id: int, db: Session = Depends(get_session)):
    return services.ProjectService(db).get(project_id)


@app.post('/api/Project', status_code=201, response_model=schemas.ProjectOut)
def create_project(payload: schemas.ProjectIn, request: Request, response: Response,
                   db: Session = Depends(get_session), client: dict = Depends(require_client)):
    """Create a project; `projectTypeId` and `teamId` must be positive and exist."""
    out = services.ProjectService(db).create(payload)
    _created(response, request, 'get_project', project_id=out.id)
    return out


@app.put('/api/Project/{project_id}', response_model=schemas.ProjectOut)
def update_project(project_id: int, payload: schemas.ProjectIn,
                   db: Session = Depends(get_session), client: dict = Depends(require_client)):
    return services.ProjectService(db).update(project_id, payload)


@app.delete('/api/Project/{project_id}', status_code=204)
def delete_project(project_id: int, db: Session = Depends(get_session), client: dict = Depends(require_client)):
    services.ProjectService(db).delete(project_id)
    return Response(status_code=204)
