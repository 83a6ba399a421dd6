"""
Test Configuration and Fixtures

- Every test gets a fresh SQLite database file (the app's BEGIN IMMEDIATE setup
  gives it the same writer serialisation the purchase path relies on)
- `client` runs the real app, lifespan included, through TestClient
- `database` hands repository tests a session factory on the test's own event loop
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read at import time
# =============================================================================
import os
from pathlib import Path
import tempfile


_TEST_ROOT = Path(tempfile.mkdtemp(prefix='tickit_test_'))
TEST_DB_PATH = _TEST_ROOT / 'tickit_test.db'
TEST_UPLOAD_DIR = _TEST_ROOT / 'uploads'


def _early_setup_test_environment() -> None:
    os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{TEST_DB_PATH}'
    os.environ['UPLOAD_DIR'] = str(TEST_UPLOAD_DIR)
    os.environ['SECRET_KEY'] = 'tickit_test_secret_key_with_enough_length_for_hs256'
    os.environ['DEBUG'] = 'false'
    os.environ['LOG_TO_FILE'] = 'false'
    os.environ.setdefault('DEPLOY_ENV', 'test')
    os.environ['MAX_UPLOAD_BYTES'] = str(64 * 1024)

    test_log_dir = Path(__file__).parent / 'test_log'
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)


_early_setup_test_environment()

from collections.abc import AsyncGenerator, Generator  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402

from src.platform.database.db_setting import (  # noqa: E402
    Database,
    create_db_and_tables,
    dispose_engine,
)


def _remove_database_file() -> None:
    for suffix in ('', '-journal', '-wal', '-shm'):
        Path(f'{TEST_DB_PATH}{suffix}').unlink(missing_ok=True)


@pytest.fixture(autouse=True)
def clean_database() -> Generator[None, None, None]:
    _remove_database_file()
    yield
    _remove_database_file()


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    from src.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    await create_db_and_tables()
    yield Database()
    await dispose_engine()
