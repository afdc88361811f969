from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from symptom_pivot.main import app
from symptom_pivot.database import Base, enable_sqlite_savepoints, get_db
from symptom_pivot.models.mention import ExtractedMention
from symptom_pivot.models.patient import Patient

SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_savepoints(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def setup_database():
    app.dependency_overrides[get_db] = override_get_db
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def add_mention(db):
    """Insert one extracted mention, creating the patient on first use."""
    counter = {"n": 0}

    def _add(patient_id="P001", segment="Anxiety", dos_date=date(2024, 1, 1), **fields):
        if not db.query(Patient).filter(Patient.patient_id == patient_id).first():
            db.add(Patient(patient_id=patient_id, patient_name=f"Patient {patient_id}"))
            db.flush()
        counter["n"] += 1
        fields.setdefault("symp_prob", "Symptom")
        mention = ExtractedMention(
            mention_id=f"{patient_id}-{counter['n']}",
            patient_id=patient_id,
            dos_date=dos_date,
            symptom_segment=segment,
            **fields,
        )
        db.add(mention)
        db.commit()
        return mention

    return _add


@pytest.fixture
def sqlite_foreign_keys():
    """Enforce foreign keys on the shared in-memory connection for one test."""

    def _set(state):
        raw = engine.raw_connection()
        try:
            raw.cursor().execute(f"PRAGMA foreign_keys={state}")
        finally:
            raw.close()

    _set("ON")
    yield
    _set("OFF")


@pytest.fixture
def test_engine():
    return engine


@pytest.fixture
def session_factory():
    return TestingSessionLocal
