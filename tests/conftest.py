"""
Shared pytest fixtures and configuration for all tests
"""
import base64
import io
from typing import AsyncGenerator
from unittest.mock import AsyncMock, Mock

import httpx
import pytest
import pytest_asyncio
from PIL import Image
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from podmayak.core.database import Database
from podmayak.database.models import User, UserRole
from podmayak.main import create_app
from podmayak.schemas.renovation import RenovationAnalysis
from podmayak.services.google_ai_service import RenovationAIService
from podmayak.services.storage import LocalBlobStore


def make_data_url(width=64, height=48, color="red", mode="RGB", fmt="PNG"):
    """Encode a solid-colour PIL image as a data URL"""
    img = Image.new(mode, (width, height), color=color)
    buffer = io.BytesIO()
    img.save(buffer, format=fmt)
    mime_type = "image/png" if fmt == "PNG" else "image/jpeg"
    return f"data:{mime_type};base64,{base64.b64encode(buffer.getvalue()).decode()}"


@pytest.fixture
def image_factory():
    """Build test images as data URLs"""
    return make_data_url


@pytest.fixture
def room_photo():
    """Landscape room photo (4:3)"""
    return make_data_url(800, 600, color=(180, 170, 160), fmt="JPEG")


@pytest.fixture
def generated_image():
    return make_data_url(800, 600, color=(40, 90, 140))


@pytest.fixture
def sample_analysis():
    return RenovationAnalysis(
        estimated_budget_range="5,000 - 8,000 AZN",
        difficulty_level="Orta",
        materials=["Laminat", "Boya"],
        furniture_to_buy=["Divan"],
        design_tips=["İşıqlı rənglərdən istifadə edin"],
        steps=["Divarlar", "Döşəmə"],
    )


@pytest.fixture
def mock_google_ai_client():
    """Mock Google GenAI client for testing without API calls"""
    mock = Mock()
    mock.aio = Mock()
    mock.aio.models = Mock()
    mock.aio.models.generate_content = AsyncMock()
    mock.aio.chats = Mock()
    return mock


@pytest.fixture
def mock_ai_service(generated_image, sample_analysis):
    """RenovationAIService stand-in returning canned images and analysis"""
    mock = Mock(spec=RenovationAIService)
    mock.generate_renovation = AsyncMock(return_value=generated_image)
    mock.edit_renovation = AsyncMock(return_value=generated_image)
    mock.analyze_renovation_plan = AsyncMock(return_value=sample_analysis)

    async def fake_stream(history, message, api_key=None):
        for chunk in ["Salam! ", "Laminat ", "tövsiyə edirəm."]:
            yield chunk

    mock.stream_chat_response = Mock(side_effect=fake_stream)
    return mock


@pytest.fixture
def app(tmp_path, mock_ai_service):
    """Application wired to a throwaway SQLite file and a local blob store"""
    return create_app(
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        ai_service=mock_ai_service,
        blob_store=LocalBlobStore(str(tmp_path / "uploads")),
    )


@pytest_asyncio.fixture
async def client(app):
    """HTTP client with the application lifespan running"""
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
            yield http_client


@pytest.fixture
def register_user(client):
    """Sign up and return {"headers", "user"} for the new account"""

    async def _register(email="user@podmayak.az", password="secret123"):
        response = await client.post("/api/auth/register", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        body = response.json()
        return {"headers": {"Authorization": f"Bearer {body['access_token']}"}, "user": body["user"]}

    return _register


@pytest.fixture
def set_user_fields(app):
    """Write user columns directly, e.g. tokens=0 or role=UserRole.ADMIN"""

    async def _set(user_id, **values):
        async with app.state.database.session() as session:
            await session.execute(update(User).where(User.id == user_id).values(**values))

    return _set


@pytest_asyncio.fixture
async def auth(register_user):
    return await register_user()


@pytest_asyncio.fixture
async def admin_auth(register_user, set_user_fields):
    account = await register_user(email="admin@podmayak.az")
    await set_user_fields(account["user"]["id"], role=UserRole.ADMIN)
    return account


@pytest_asyncio.fixture
async def database(tmp_path):
    """Fresh SQLite database with all tables created"""
    db = Database(f"sqlite:///{tmp_path / 'unit.db'}")
    await db.create_tables()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database) -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test"""
    async with database.session_factory() as session:
        yield session
