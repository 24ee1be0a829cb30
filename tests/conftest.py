import pytest
import os
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

from app.database import Base, build_engine, get_db
from app.main import app
from app.models.company import Company
from app.models.employee import Employee
from fastapi.testclient import TestClient

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = build_engine(SQLALCHEMY_DATABASE_URL, poolclass=StaticPool)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """
    Fresh schema per test. Services commit and roll back on their own, so
    isolation comes from recreating the tables rather than an outer transaction.
    """
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)


def _make_employee(db_session, company, user_id, full_name, email, is_admin=False):
    employee = Employee(
        company_id=company.id,
        user_id=user_id,
        full_name=full_name,
        email=email,
        position="Analyst",
        department="People",
        is_admin=is_admin,
    )
    db_session.add(employee)
    db_session.commit()
    db_session.refresh(employee)
    return employee


@pytest.fixture(scope="function")
def company(db_session):
    """Create the default tenant for tests."""
    company = Company(name="Alpha Corp", cnpj="11.111.111/0001-11")
    db_session.add(company)
    db_session.commit()
    return company


@pytest.fixture(scope="function")
def other_company(db_session):
    """A second tenant whose rows must stay invisible to Alpha Corp."""
    company = Company(name="Beta Ltda", cnpj="22.222.222/0001-22")
    db_session.add(company)
    db_session.commit()
    return company


@pytest.fixture(scope="function")
def admin(db_session, company):
    return _make_employee(db_session, company, "idp|admin", "Ana Admin", "ana@alpha.com", is_admin=True)


@pytest.fixture(scope="function")
def employee(db_session, company):
    return _make_employee(db_session, company, "idp|bruno", "Bruno Silva", "bruno@alpha.com")


@pytest.fixture(scope="function")
def colleague(db_session, company):
    return _make_employee(db_session, company, "idp|carla", "Carla Souza", "carla@alpha.com")


@pytest.fixture(scope="function")
def outsider_admin(db_session, other_company):
    return _make_employee(db_session, other_company, "idp|diego", "Diego Beta", "diego@beta.com", is_admin=True)


@pytest.fixture(scope="function")
def outsider(db_session, other_company):
    return _make_employee(db_session, other_company, "idp|elisa", "Elisa Beta", "elisa@beta.com")


@pytest.fixture(scope="function")
def get_token():
    """Helper fixture to mint bearer tokens the way the identity provider does."""
    from app.services.auth import create_access_token

    def _get_token(employee):
        return create_access_token(data={"sub": employee.user_id, "type": "access"})
    return _get_token


@pytest.fixture(scope="function")
def auth_headers(get_token):
    def _auth_headers(employee):
        return {"Authorization": f"Bearer {get_token(employee)}"}
    return _auth_headers


@pytest.fixture(scope="function")
def client(db_session):
    """Get a TestClient that uses the test database session via dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
