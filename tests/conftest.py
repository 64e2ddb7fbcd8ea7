from datetime import datetime, timezone

import mongomock
import pytest

from app import create_app
from config import Settings
from models.category import Category
from models.product import Pricing, Product, ProductStatus
from models.user import User, UserRole
from utils.money import to_decimal

PASSWORD = "s3cret-pass"


@pytest.fixture
def settings():
    return Settings(
        mongodb_uri=None,
        mongodb_db="marketplace_test",
        host="127.0.0.1",
        port=5000,
        debug=False,
        log_level="WARNING",
        cors_origins=("*",),
        jwt_secret="test-access-secret-0123456789abcdef",
        jwt_refresh_secret="test-refresh-secret-0123456789abcdef",
        access_token_ttl_minutes=60,
        refresh_token_ttl_days=7,
        # Minimum bcrypt cost keeps the suite fast
        bcrypt_rounds=4,
    )


@pytest.fixture
def database():
    return mongomock.MongoClient().db


@pytest.fixture
def app(settings, database):
    app = create_app(settings, database=database)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app, database):
    """Insert a user directly and return its string id"""
    hasher = app.config["password_hasher"]
    counter = {"n": 0}

    def _make_user(role=UserRole.CUSTOMER, email=None, full_name="Test User", password=PASSWORD):
        counter["n"] += 1
        user = User(
            full_name=full_name,
            email=email or f"user{counter['n']}@example.com",
            phone_number="555-123-4567",
            password_hash=hasher.hash(password),
            role=role,
        )
        result = database.users.insert_one(user.to_dict(include_password=True))
        return str(result.inserted_id)

    return _make_user


@pytest.fixture
def auth_headers(app):
    def _auth_headers(user_id):
        token = app.config["token_service"].issue_access_token(user_id)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture
def make_category(database):
    def _make_category(name="Electronics", slug="electronics", is_active=True, level=0):
        category = Category(name=name, slug=slug, is_active=is_active, level=level)
        return str(database.categories.insert_one(category.to_dict()).inserted_id)

    return _make_category


@pytest.fixture
def make_product(database):
    def _make_product(seller_id, slug, price="10", status=ProductStatus.ACTIVE, category_id="",
                      name=None, sale_price=None, created_at=None):
        product = Product(
            name=name or slug.replace("-", " ").title(),
            slug=slug,
            description="A product",
            category_id=category_id,
            seller_id=seller_id,
            pricing=Pricing(
                regular_price=to_decimal(price),
                sale_price=to_decimal(sale_price) if sale_price is not None else None,
            ),
            stock=10,
            status=status,
            created_at=created_at or datetime.now(timezone.utc),
        )
        return str(database.products.insert_one(product.to_dict()).inserted_id)

    return _make_product
