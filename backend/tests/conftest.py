import os
import tempfile

_db_dir = tempfile.mkdtemp(prefix="branch-api-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_db_dir}/test.db"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["TIMEZONE"] = "UTC"
os.environ["DEFAULT_LOCALE"] = "ar"
os.environ.pop("STATIC_OTP", None)

from datetime import time  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from branch_api.main import app  # noqa: E402
from branch_api.core.clock import fixed_clock, get_clock  # noqa: E402
from branch_api.core.db import Base, SessionLocal, engine  # noqa: E402
from branch_api.core.rate_limit import limiter  # noqa: E402
from branch_api.core.security import token_payload  # noqa: E402
from branch_api.models import Branch, BranchWorkingHour, User, UserRole  # noqa: E402
from branch_api.core.security import get_password_hash  # noqa: E402


@pytest.fixture(autouse=True)
def clean_tables():
    limiter.reset()
    yield
    app.dependency_overrides.clear()
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def pin_now():
    def _pin(instant):
        app.dependency_overrides[get_clock] = lambda: fixed_clock(instant)

    return _pin


@pytest.fixture
def make_branch(db):
    def _make(name=None, address=None, description=None, is_active=True, hours=()):
        branch = Branch(
            name=name or {"ar": "فرع", "en": "Branch"},
            address=address,
            description=description,
            is_active=is_active,
        )
        for day, opens_at, closes_at, is_closed in hours:
            branch.working_hours.append(
                BranchWorkingHour(
                    day_of_week=int(day),
                    opens_at=time.fromisoformat(opens_at) if opens_at else None,
                    closes_at=time.fromisoformat(closes_at) if closes_at else None,
                    is_closed=is_closed,
                )
            )
        db.add(branch)
        db.commit()
        db.refresh(branch)
        return branch

    return _make


@pytest.fixture
def make_user(db):
    def _make(role=UserRole.ADMIN, email="admin@branch.test", phone=None, password="password123", is_active=True):
        user = User(
            name="Branch Admin" if role == UserRole.ADMIN else "Customer",
            email=email,
            phone=phone,
            password_hash=get_password_hash(password) if password else None,
            role=role,
            is_active=is_active,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def admin_headers(make_user):
    user = make_user()
    return {"Authorization": f"Bearer {token_payload(user)['access_token']}"}
