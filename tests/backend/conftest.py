import os
import uuid

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

TEST_DB_URL = "sqlite://:memory:"
os.environ["DATABASE_URL"] = TEST_DB_URL
os.environ["GENERATE_SCHEMAS"] = "true"

from devflow.core.db import Database
from devflow.core.revalidation import RevalidationChannel
from devflow.main import app
from devflow.models import Answer, User
from devflow.services.question_service import QuestionService


class RecordingListener:
    """Revalidation listener remembering every path it was told about."""

    def __init__(self):
        self.paths: list[str] = []

    def __call__(self, path: str) -> None:
        self.paths.append(path)


@pytest_asyncio.fixture
async def database():
    """
    A clean in-memory SQLite database for every test.
    Tables are created from the models on connect.
    """
    handle = Database(TEST_DB_URL, generate_schemas=True)
    await handle.connect()
    yield handle
    await handle.close()


@pytest_asyncio.fixture
async def revalidated():
    return RecordingListener()


@pytest_asyncio.fixture
async def service(database, revalidated):
    channel = RevalidationChannel()
    channel.subscribe(revalidated)
    return QuestionService(database, channel)


@pytest_asyncio.fixture
async def client(database):
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB.
    Startup hooks don't run under ASGITransport, so the store handle is set directly.
    """
    app.state.database = database
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client


@pytest_asyncio.fixture
async def create_user(database):
    """
    Factory fixture to create users directly via ORM.
    """

    async def _create_user(reputation: int = 0) -> User:
        handle = uuid.uuid4().hex[:8]
        return await User.create(
            external_id=f"ext_{handle}",
            name=f"User {handle}",
            username=f"user_{handle}",
            email=f"{handle}@example.com",
            reputation=reputation,
        )

    return _create_user


@pytest_asyncio.fixture
async def create_answer(database):
    async def _create_answer(question_id: int, author: User, content: str = "Try this.") -> Answer:
        return await Answer.create(question_id=question_id, author=author, content=content)

    return _create_answer
