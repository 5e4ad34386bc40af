import os
import sys
from pathlib import Path

# Ajoute la racine du projet au PYTHONPATH EN PREMIER
sys.path.insert(0, str(Path(__file__).parent.parent))

# Base SQLite de test AVANT d'importer l'app (Settings lit l'env à l'import)
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ.setdefault("STATIC_DIR", "./__no_static__")

import pytest

from taskboard.core.database import Base, engine, SessionLocal
from taskboard.main import app
from taskboard.services.task_repository import TaskRepository


@pytest.fixture(autouse=True)
def setup_teardown():
    """Crée et nettoie la DB avant/après chaque test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    """Client de test FastAPI"""
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture
def db():
    """Session DB pour les tests"""
    db = SessionLocal()
    yield db
    db.close()


@pytest.fixture
def repo(db):
    return TaskRepository(db)
