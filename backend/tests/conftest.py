from pathlib import Path
import os
import pytest

# Settings are read when `devhouse.config` is first imported, so the test
# environment must be in place before any test module imports the app.
TEST_DB = Path(__file__).resolve().parents[1] / "test_devhouse.db"
os.environ.setdefault("JWT_SECRET_KEY", "test-signing-key-with-enough-length-0123456789")
os.environ.setdefault("JWT_ISSUER", "devhouse-api")
os.environ.setdefault("JWT_AUDIENCE", "devhouse-clients")
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB}"

from sqlmodel import Session  # noqa: E402
from devhouse.database import engine, create_db_and_tables, drop_db_and_tables  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_db():
    """Recreate every table so each test starts from an empty database."""
    drop_db_and_tables()
    create_db_and_tables()
    yield


@pytest.fixture
def session():
    with Session(engine) as s:
        yield s


@pytest.fixture(scope="session", autouse=True)
def remove_db_file():
    yield
    engine.dispose()
    if TEST_DB.exists():
        try:
            TEST_DB.unlink()
        except OSError:
            pass
