"""
Alumni Portal - Test Configuration and Fixtures
"""
import io
import os
from typing import AsyncGenerator, Callable

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import NullPool
from faker import Faker
from PIL import Image

# Set testing environment before the app reads its settings
os.environ['ENVIRONMENT'] = 'testing'
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///./test.db'
os.environ['SECRET_KEY'] = 'test-secret-key-for-testing-only'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['RATE_LIMIT_ENABLED'] = 'false'
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['LOG_FILE'] = ''
os.environ['SMTP_USER'] = ''
os.environ['SMTP_PASSWORD'] = ''

from app.main import app
from app.api.dependencies import get_asset_store
from app.core.database import Base, get_db
from app.core.security import get_password_hash, create_access_token
from app.models.user import User, UserRole
from app.services.asset_store import AssetStore

fake = Faker()

TEST_PASSWORD = 'testpassword123'


@pytest.fixture
async def db_session(tmp_path) -> AsyncGenerator[AsyncSession, None]:
    """Fresh SQLite database file per test"""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        echo=False,
        poolclass=NullPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def asset_store(tmp_path) -> AssetStore:
    root = tmp_path / "storage"
    root.mkdir()
    return AssetStore(root)


@pytest.fixture
async def client(db_session: AsyncSession, asset_store: AssetStore) -> AsyncGenerator[AsyncClient, None]:
    """Test client bound to the per-test database and asset store"""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_asset_store] = lambda: asset_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session: AsyncSession) -> Callable:
    """Factory for persisted users; keyword arguments override the defaults"""
    async def _make_user(**overrides) -> User:
        fields = dict(
            name=fake.name(),
            email=fake.unique.email(),
            phone=fake.numerify('##########'),
            hashed_password=get_password_hash(TEST_PASSWORD),
            roll_no=fake.unique.random_int(min=1, max=99999),
            batch=2015,
            branch='Computer Science',
            role=UserRole.USER,
            is_verified=True,
            achievements=[],
        )
        fields.update(overrides)
        user = User(**fields)
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
async def test_user(make_user) -> User:
    return await make_user()


@pytest.fixture
async def admin_user(make_user) -> User:
    return await make_user(role=UserRole.ADMIN, roll_no=None, batch=None, branch=None, phone=None)


def bearer_headers(user: User) -> dict:
    token_data = {
        'sub': str(user.id),
        'email': user.email,
        'role': user.role.value
    }
    return {'Authorization': f'Bearer {create_access_token(token_data)}'}


@pytest.fixture
def headers_for() -> Callable[[User], dict]:
    return bearer_headers


@pytest.fixture
def auth_headers(test_user: User) -> dict:
    """Generate authentication headers for test user"""
    return bearer_headers(test_user)


@pytest.fixture
def admin_auth_headers(admin_user: User) -> dict:
    """Generate authentication headers for admin user"""
    return bearer_headers(admin_user)


def make_image_bytes(width: int = 800, height: int = 600, fmt: str = 'PNG',
                     mode: str = 'RGB', color=(200, 30, 30)) -> bytes:
    """Encoded in-memory image for upload tests"""
    buffer = io.BytesIO()
    if mode == 'RGBA' and len(color) == 3:
        color = (*color, 128)
    Image.new(mode, (width, height), color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def image_factory() -> Callable[..., bytes]:
    return make_image_bytes


@pytest.fixture
def png_bytes() -> bytes:
    return make_image_bytes(fmt='PNG')


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_image_bytes(fmt='JPEG')
