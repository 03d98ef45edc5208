import os
from types import SimpleNamespace

import pytest

# Force the in-memory SQLite engine before appraisal.db.database is imported
os.environ.pop("APPRAISAL_TEST_DB", None)
os.environ.setdefault("PYTEST_RUNNING", "1")

from fastapi.testclient import TestClient  # noqa: E402

import appraisal.db.database as db_module  # noqa: E402
from appraisal.api.main import app  # noqa: E402
from appraisal.db import models  # noqa: E402
from appraisal.utils.feature_flags import refresh_workflow_flags  # noqa: E402

_FLAG_ENV_VARS = (
    "STRICT_ITEM_MATCH",
    "ENFORCE_WEIGHT_TOTAL",
    "NOTIFICATIONS_ENABLED",
    "RECENT_ACTIONS_ENABLED",
)

# Session shared with the app for the duration of one test
_GLOBAL_SESSION = None


@pytest.fixture(autouse=True)
def reset_workflow_flags(monkeypatch):
    """Every test starts from the default flag state."""
    for env_name in _FLAG_ENV_VARS:
        monkeypatch.delenv(env_name, raising=False)
    refresh_workflow_flags()
    yield
    refresh_workflow_flags()


# Per-test schema on the in-memory engine; workflow code commits for real, so
# tables are recreated instead of wrapping each test in an outer transaction.
@pytest.fixture(autouse=True)
def db_session():
    global _GLOBAL_SESSION
    models.Base.metadata.create_all(bind=db_module.engine)
    session = db_module.SessionLocal()
    _GLOBAL_SESSION = session
    try:
        yield session
    finally:
        _GLOBAL_SESSION = None
        session.rollback()
        session.close()
        models.Base.metadata.drop_all(bind=db_module.engine)


def _override_get_db():
    if _GLOBAL_SESSION is not None:
        yield _GLOBAL_SESSION
        return
    session = db_module.SessionLocal()
    try:
        yield session
    finally:
        session.close()


app.dependency_overrides[db_module.get_db] = _override_get_db


@pytest.fixture
def db(db_session):
    return db_session


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def enable_flag(monkeypatch):
    """Turn a workflow flag on (or set it to ``value``) for the current test."""
    def _enable(env_name: str, value: str = "true"):
        monkeypatch.setenv(env_name, value)
        refresh_workflow_flags()
    return _enable


def _add(db, obj):
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@pytest.fixture
def catalog(db_session):
    """A small HR catalog.

    Engineering department with a supervisor and an engineer whose position
    maps Communication (level 3) then Problem Solving (level 5); plus an
    employee without a position and one in another department.
    """
    db = db_session
    engineering = _add(db, models.Department(name="Engineering", has_am=True))
    sales = _add(db, models.Department(name="Sales"))
    engineer = _add(db, models.Position(title="Engineer", department_id=engineering.id))
    analyst = _add(db, models.Position(title="Analyst", department_id=sales.id))
    lead = _add(db, models.Position(title="Team Lead", department_id=engineering.id))
    communication = _add(db, models.Competency(code="COM", name="Communication", description="Clear written and verbal communication"))
    problem_solving = _add(db, models.Competency(code="PS", name="Problem Solving"))
    mentoring = _add(db, models.Competency(code="MEN", name="Mentoring"))
    _add(db, models.PositionCompetency(position_id=engineer.id, competency_id=communication.id, required_level=3, max_level_increment=1))
    _add(db, models.PositionCompetency(position_id=engineer.id, competency_id=problem_solving.id, required_level=5))
    supervisor = _add(db, models.User(
        employee_id="S-001", name="Sam Supervisor", email="sam@example.com",
        position_id=lead.id, department_id=engineering.id, role="Supervisor",
    ))
    employee = _add(db, models.User(
        employee_id="E-100", name="Erin Engineer", email="erin@example.com",
        position_id=engineer.id, department_id=engineering.id,
    ))
    unplaced = _add(db, models.User(
        employee_id="E-101", name="Uma Unplaced", email="uma@example.com",
        position_id=None, department_id=engineering.id,
    ))
    outsider = _add(db, models.User(
        employee_id="E-200", name="Oscar Outsider", email="oscar@example.com",
        position_id=analyst.id, department_id=sales.id,
    ))
    cycle = _add(db, models.Cycle(name="2025 H1"))
    return SimpleNamespace(
        engineering=engineering,
        sales=sales,
        engineer=engineer,
        analyst=analyst,
        communication=communication,
        problem_solving=problem_solving,
        mentoring=mentoring,
        supervisor=supervisor,
        employee=employee,
        unplaced=unplaced,
        outsider=outsider,
        cycle=cycle,
    )


@pytest.fixture
def cl_payload(catalog):
    def _payload(employee=None, **overrides):
        employee = employee or catalog.employee
        payload = {
            "employee_id": employee.id,
            "supervisor_id": catalog.supervisor.id,
            "department_id": employee.department_id or catalog.engineering.id,
            "cycle_id": catalog.cycle.id,
        }
        payload.update(overrides)
        return payload
    return _payload
