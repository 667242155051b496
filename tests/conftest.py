import os

# Must be set before anything imports shared.config
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["WEBHOOK_URL"] = ""
os.environ["JOB_BACKOFF_SECONDS"] = "0"

import httpx
import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker

from main import app
from services.order_service.dependencies import build_order_service
from shared.config.database import Base, build_engine, get_db


class MemorySink:
    """Notification sink that keeps messages for assertions."""

    def __init__(self):
        self.messages = []

    def send(self, message: str) -> None:
        self.messages.append(message)


ORDER_PAYLOAD = {
    "customer_name": "John Doe",
    "customer_email": "john@acme.com",
    "item": "laptop",
    "quantity": 2,
    "total_price": 2499.98,
}


@pytest.fixture
def order_payload():
    return dict(ORDER_PAYLOAD)


@pytest.fixture
async def engine():
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def sink():
    return MemorySink()


@pytest.fixture
async def order_service(session_factory, sink):
    service = build_order_service(session_factory, sink=sink, webhook_url=None, workers=1, backoff=0)
    service.jobs.start()
    yield service
    await service.jobs.stop()


@pytest.fixture
async def client(order_service, session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    previous = (app.state.order_service, app.state.job_queue)
    app.dependency_overrides[get_db] = override_get_db
    app.state.order_service = order_service
    app.state.job_queue = order_service.jobs

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
    app.state.order_service, app.state.job_queue = previous
