from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from api.server import create_app
from sqlviewer.engine import ViewerEngine


@pytest.fixture
def default_db(tmp_path: Path) -> str:
    return str(tmp_path / "demo.sqlite")


@pytest.fixture
def uploads_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def engine(default_db: str, uploads_dir: Path):
    viewer = ViewerEngine(default_db, str(uploads_dir), seed_demo=True)
    yield viewer
    viewer.close()


@pytest.fixture
def client(engine: ViewerEngine) -> TestClient:
    return TestClient(create_app(engine))
