import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.database.connection import Base, get_db
from app.system_models.patient_model.patient_model import Patient  # noqa: F401
from tests.fakes import InMemoryPatientStore


@pytest.fixture
def patient_data() -> dict:
    return {
        "first_name": "Jane",
        "last_name": "Doe",
        "address": "158 Main Street",
        "city": "Springfield",
        "state": "IL",
        "zip_code": "62704",
        "phone_number": "217-555-0134",
        "email": "jane.doe@example.com",
    }


@pytest.fixture
def make_patient(patient_data):
    """Valid candidate data with selected fields overridden."""
    def _make(**overrides) -> dict:
        return {**patient_data, **overrides}
    return _make


@pytest.fixture
def store() -> InMemoryPatientStore:
    return InMemoryPatientStore()


@pytest_asyncio.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    from app.main import app

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
