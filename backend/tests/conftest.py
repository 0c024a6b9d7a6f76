"""Pytest configuration and shared fixtures."""
import base64
import io
import sys
from pathlib import Path
from types import SimpleNamespace

# Add the backend directory to Python path
backend_dir = Path(__file__).parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

import pytest
from httpx import ASGITransport, AsyncClient
from PIL import Image

from artspace.api.deps import get_generation_service
from artspace.domain.accounts.models import PaymentAccount, PaymentMethod, User, UserRole
from artspace.domain.common.types import utcnow
from artspace.infra.storage.store import create_market_store
from artspace.main import create_app
from artspace.services.generation_service import GenerationService


def png_bytes(width: int = 16, height: int = 16, color=(200, 40, 40)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buf, format="PNG")
    return buf.getvalue()


def png_data_url(width: int = 16, height: int = 16) -> str:
    return "data:image/png;base64," + base64.b64encode(png_bytes(width, height)).decode("ascii")


class FakeGeminiModels:
    """Stands in for client.aio.models; records calls and replays configured outcomes."""

    def __init__(self, text="A luminous study in red.", image: bytes = b"", errors=None):
        self.text = text
        self.image = image
        self.errors = dict(errors or {})  # model name -> exception
        self.calls = []

    async def generate_content(self, model, contents, config=None):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if model in self.errors:
            raise self.errors[model]
        if config is not None:
            parts = [SimpleNamespace(inline_data=SimpleNamespace(data=self.image))] if self.image else []
            return SimpleNamespace(parts=parts, text=None)
        return SimpleNamespace(text=self.text, parts=None)


def fake_client(models: FakeGeminiModels):
    return SimpleNamespace(aio=SimpleNamespace(models=models))


@pytest.fixture
def gemini_models():
    return FakeGeminiModels(image=png_bytes(32, 32))


@pytest.fixture
def generation(gemini_models):
    return GenerationService(
        default_text_model="text-main",
        backup_text_model="text-backup",
        default_image_model="image-main",
        timeout_s=2.0,
        client=fake_client(gemini_models),
    )


@pytest.fixture
def store():
    """Seeded in-memory store."""
    market_store = create_market_store("sqlite://")
    market_store.initialize(seed_demo_data=True)
    yield market_store
    market_store.backend.engine.dispose()


@pytest.fixture
def empty_store():
    market_store = create_market_store("sqlite://")
    market_store.initialize(seed_demo_data=False)
    yield market_store
    market_store.backend.engine.dispose()


@pytest.fixture
def buyer() -> User:
    return User.create(name="Mara Quinn", email="mara@collectors.com", role=UserRole.BUYER)


@pytest.fixture
def artist() -> User:
    return User.create(
        name="Theo Marsh",
        email="theo@studio.com",
        role=UserRole.ARTIST,
        payment_account=PaymentAccount(
            type=PaymentMethod.PAYPAL, identifier="theo@paypal.com", connected_at=utcnow()
        ),
    )


@pytest.fixture
def admin() -> User:
    return User.create(name="Ada Admin", email="ada@artsphere.com", role=UserRole.ADMIN)


@pytest.fixture
def app(store, generation):
    application = create_app(store=store)
    application.dependency_overrides[get_generation_service] = lambda: generation
    return application


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
