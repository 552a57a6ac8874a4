import json
from typing import AsyncGenerator, Callable, Dict

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel.pool import StaticPool

from teestore.core.database.entities.categories import Category
from teestore.core.database.entities.products import Product
from teestore.core.database.entities.users import User
from teestore.core.database.repositories.bundle import RepoBundle, build_repos
from teestore.core.database.utils import create_all
from teestore.core.security import create_access_token, hash_password
from teestore.payments.razorpay import RazorpayClient
from teestore.server.core.config import PricingConfig, RazorpayConfig

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def _gateway_handler(orders: Dict[str, int]) -> Callable[[httpx.Request], httpx.Response]:
    """Minimal Razorpay API double for orders and payments.

    ``orders`` maps gateway order ids to the amount (paise) they were opened for.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "POST" and request.url.path.endswith("/orders"):
            body = json.loads(request.content)
            orders["order_mock_1"] = body["amount"]
            return httpx.Response(
                200,
                json={"id": "order_mock_1", "amount": body["amount"], "currency": body["currency"], "receipt": body["receipt"]},
            )
        if request.method == "GET" and "/orders/" in request.url.path:
            order_id = request.url.path.rsplit("/", 1)[-1]
            if order_id not in orders:
                return httpx.Response(400, json={"error": {"description": "The id provided does not exist"}})
            return httpx.Response(
                200, json={"id": order_id, "amount": orders[order_id], "currency": "INR", "status": "paid"}
            )
        if request.method == "GET" and "/payments/" in request.url.path:
            payment_id = request.url.path.rsplit("/", 1)[-1]
            return httpx.Response(
                200,
                json={"id": payment_id, "amount": 100000, "currency": "INR", "status": "captured", "method": "upi"},
            )
        return httpx.Response(404, json={"error": {"description": "not found"}})

    return handler


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a new session for each test."""
    async_session_maker = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session_maker() as session:
        yield session


@pytest.fixture
def repos(session: AsyncSession) -> RepoBundle:
    return build_repos(session)


@pytest.fixture
def pricing() -> PricingConfig:
    return PricingConfig()


@pytest.fixture
def gateway_orders() -> Dict[str, int]:
    """Gateway orders known to the mocked Razorpay API: id -> amount in paise."""
    return {}


@pytest_asyncio.fixture
async def gateway(test_config, gateway_orders: Dict[str, int]) -> AsyncGenerator[RazorpayClient, None]:
    """Configured gateway client talking to a mocked Razorpay API."""
    config = RazorpayConfig(
        key_id=test_config.razorpay.key_id,
        key_secret=test_config.razorpay.key_secret,
        webhook_secret=test_config.razorpay.webhook_secret,
        api_url=test_config.razorpay.api_url,
    )
    transport = httpx.MockTransport(_gateway_handler(gateway_orders))
    client = RazorpayClient(config, client=httpx.AsyncClient(transport=transport))

    yield client

    await client.aclose()


@pytest_asyncio.fixture(name="client")
async def client_fixture(session: AsyncSession, gateway: RazorpayClient) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with overridden dependencies."""
    from teestore.core.database import get_session
    from teestore.payments.razorpay import get_razorpay_client
    from teestore.server.main import app

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_razorpay_client] = lambda: gateway

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()


async def _make_user(repos: RepoBundle, email: str, role: int = 0, reward_points: int = 0) -> User:
    return await repos.users.create(
        User(
            name=email.split("@")[0].title(),
            email=email,
            password_hash=hash_password("secret123"),
            role=role,
            reward_points=reward_points,
        )
    )


@pytest_asyncio.fixture
async def customer(repos: RepoBundle) -> User:
    return await _make_user(repos, "asha@example.com", reward_points=100)


@pytest_asyncio.fixture
async def other_customer(repos: RepoBundle) -> User:
    return await _make_user(repos, "ravi@example.com")


@pytest_asyncio.fixture
async def admin(repos: RepoBundle) -> User:
    return await _make_user(repos, "admin@example.com", role=1)


def _bearer(user: User) -> Dict[str, str]:
    token, _ = create_access_token(user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(customer: User) -> Dict[str, str]:
    return _bearer(customer)


@pytest.fixture
def other_headers(other_customer: User) -> Dict[str, str]:
    return _bearer(other_customer)


@pytest.fixture
def admin_headers(admin: User) -> Dict[str, str]:
    return _bearer(admin)


@pytest_asyncio.fixture
async def category(repos: RepoBundle) -> Category:
    return await repos.categories.create(Category(name="Men", slug="men"))


@pytest.fixture
def make_product(repos: RepoBundle, category: Category) -> Callable:
    """Factory creating an active catalogue product with stock in every size."""

    async def _make(name: str = "Classic Tee", price: int = 500, stock: int = 10, **fields) -> Product:
        product = Product(
            name=name,
            price=price,
            mrp=fields.pop("mrp", 0),
            category_id=fields.pop("category_id", category.id),
            stock_s=stock,
            stock_m=stock,
            stock_l=stock,
            stock_xl=stock,
            stock_xxl=stock,
            **fields,
        )
        product.refresh_derived()
        return await repos.products.create(product)

    return _make


@pytest_asyncio.fixture
async def product(make_product) -> Product:
    return await make_product()
