from pathlib import Path
import sys

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from votehub import create_app
from votehub.extensions import db
from votehub.models import Candidate


@pytest.fixture()
def app(tmp_path: Path):
    db_file = tmp_path / "test.sqlite3"
    app = create_app(
        {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{db_file}",
            "SQLALCHEMY_ENGINE_OPTIONS": {"connect_args": {"timeout": 15, "check_same_thread": False}},
            "SECRET_KEY": "test-secret",
        }
    )

    with app.app_context():
        driver = db.engine.url.drivername
        if driver != "sqlite":
            raise RuntimeError(
                f"Test database must be SQLite, got '{driver}'. Refusing to run destructive test setup."
            )
        db.drop_all()
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def db_session(app):
    with app.app_context():
        yield db.session


@pytest.fixture()
def candidates(db_session):
    """Alice, Bob, Carol and Dave with ids 1-4, nobody has voted."""
    rows = [
        Candidate(name="Alice", voter_id="VOTER-A"),
        Candidate(name="Bob", voter_id="VOTER-B"),
        Candidate(name="Carol", voter_id="VOTER-C"),
        Candidate(name="Dave", voter_id="VOTER-D"),
    ]
    db_session.add_all(rows)
    db_session.commit()
    return rows
