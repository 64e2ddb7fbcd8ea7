import logging
from decimal import Decimal

import pytest

from app import create_app
from config import get_settings
from utils.money import to_decimal, to_json_number
from utils.validators import parse_price, parse_quantity, validate_phone


def test_health_reports_attached_database(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["ok"] is True
    assert body["db"]["enabled"] is True


def test_app_without_database(settings):
    app = create_app(settings)
    client = app.test_client()

    assert client.get("/health").get_json()["db"]["enabled"] is False
    resp = client.post("/api/auth/login", json={"email": "a@b.co", "password": "whatever1"})
    assert resp.status_code == 503
    assert resp.get_json()["error"] == "Database not available"


def test_unknown_route_is_json(client):
    resp = client.get("/api/does-not-exist")
    assert resp.status_code == 404
    assert resp.get_json()["ok"] is False


def test_unexpected_errors_are_not_echoed(app, client, database, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("connection string mongodb://user:pw@host")

    monkeypatch.setattr(app.config["db_users"], "find_one", boom)
    resp = client.post("/api/auth/login", json={"email": "a@b.co", "password": "whatever1"})
    assert resp.status_code == 500
    assert resp.get_json() == {"ok": False, "error": "Internal server error"}


@pytest.mark.parametrize("value, expected", [(0.1, Decimal("0.1")), ("19.99", Decimal("19.99")), (3, Decimal("3"))])
def test_to_decimal_avoids_float_expansion(value, expected):
    assert to_decimal(value) == expected


def test_to_json_number():
    assert to_json_number(Decimal("230")) == 230
    assert isinstance(to_json_number(Decimal("230.00")), int)
    assert to_json_number(Decimal("0.30")) == 0.3


@pytest.mark.parametrize("phone, ok", [("5551234567", True), ("+1 (555) 123-4567", True), ("555-1234", False)])
def test_validate_phone(phone, ok):
    assert validate_phone(phone)[0] is ok


def test_parse_price_and_quantity():
    assert parse_price("10.50") == (Decimal("10.50"), "")
    assert parse_price("abc")[0] is None
    assert parse_price(True)[0] is None
    assert parse_price(12)[0] == Decimal("12.00")
    assert parse_price("1e30") == (None, "Price must be at most 99999999.99")
    assert parse_price("0.001") == (None, "Price must have at most 2 decimal places")
    assert parse_quantity(3) == (3, "")
    assert parse_quantity("3") == (3, "")
    assert parse_quantity(0)[0] is None


def test_default_jwt_secrets_are_logged(monkeypatch, caplog):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    monkeypatch.setenv("JWT_REFRESH_SECRET", "refresh-secret-from-env-0123456789ab")

    with caplog.at_level(logging.WARNING, logger="config"):
        settings = get_settings()

    assert "JWT_SECRET not set" in caplog.text
    assert "JWT_REFRESH_SECRET not set" not in caplog.text
    assert settings.jwt_refresh_secret == "refresh-secret-from-env-0123456789ab"
