"""CLI script to load reference roles, teams and project types into the DB.
Usage: python scripts/seed_reference_data.py [--roles R1,R2] [--teams T1,T2] [--project-types P1,P2]

Names that already exist are reported and skipped, so the script can be
run repeatedly against the same database.
"""
import sys
import argparse
import pathlib
# Ensure `backend/` is on sys.path so `devhouse` package imports work when running this script directly
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
from sqlmodel import Session
from devhouse.database import engine, create_db_and_tables
from devhouse import schemas, services

DEFAULT_ROLES = ['Backend Developer', 'Frontend Developer', 'QA Engineer']
DEFAULT_TEAMS = ['Core', 'Platform']
DEFAULT_PROJECT_TYPES = ['Web', 'Mobile', 'Internal Tool']


def _split(value):
    return [v.strip() for v in value.split(',') if v.strip()] if value else None


def seed(session: Session, service_class, names) -> int:
    """Create each name through `service_class`; return how many were new."""
    svc = service_class(session)
    created = 0
    for name in names:
        try:
            out = svc.create(schemas.NamedIn(name=name))
        except services.ValidationError as e:
            print(f'Skipped {svc.label} {name!r}: {e}')
            continue
        created += 1
        print(f'Created {svc.label} {out.name!r} (id {out.id})')
    return created


def main(roles=None, teams=None, project_types=None):
    create_db_and_tables()
    with Session(engine) as session:
        total = seed(session, services.RoleService, roles or DEFAULT_ROLES)
        total += seed(session, services.TeamService, teams or DEFAULT_TEAMS)
        total += seed(session, services.ProjectTypeService, project_types or DEFAULT_PROJECT_TYPES)
    print(f'Total created rows: {total}')


if __name__ == '__main__':
    parser = argparse.ArgumentParser()
    parser.add_argument('--roles', help='Comma separated role names')
    parser.add_argument('--teams', help='Comma separated team names')
    parser.add_argument('--project-types', help='Comma separated project type names')
    args = parser.parse_args()
    main(roles=_split(args.roles), teams=_split(args.teams), project_types=_split(args.project_types))
