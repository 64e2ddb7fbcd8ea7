from decimal import Decimal

from bson import ObjectId

from models.product import ProductStatus
from models.user import UserRole


def test_checkout_snapshots_price_and_seller(client, database, make_user, make_product, auth_headers):
    seller_a = make_user(role=UserRole.SELLER)
    seller_b = make_user(role=UserRole.SELLER)
    buyer = make_user()
    lamp = make_product(seller_a, "lamp", price="100", sale_price="80")
    mug = make_product(seller_b, "mug", price="12.50")

    resp = client.post("/api/orders/", json={"items": [
        {"product_id": lamp, "quantity": 2},
        {"product_id": mug, "quantity": 1},
    ]}, headers=auth_headers(buyer))
    assert resp.status_code == 201
    order = resp.get_json()["order"]
    assert order["userId"] == buyer
    assert order["totalAmount"] == 172.5
    assert [(i["sellerId"], i["unitPrice"], i["quantity"]) for i in order["items"]] == [
        (seller_a, 80, 2),
        (seller_b, 12.5, 1),
    ]

    stored = database.orders.find_one({"_id": ObjectId(order["_id"])})
    assert stored["items"][0]["unit_price"].to_decimal() == Decimal("80")


def test_checkout_feeds_seller_dashboard(client, make_user, make_product, auth_headers):
    seller = make_user(role=UserRole.SELLER)
    buyer = make_user()
    lamp = make_product(seller, "lamp", price="19.99")

    client.post("/api/orders/", json={"items": [{"product_id": lamp, "quantity": 3}]},
                headers=auth_headers(buyer))

    stats = client.get("/api/dashboard/seller-stats", headers=auth_headers(seller)).get_json()
    assert stats["totalSales"] == 59.97
    assert stats["totalOrders"] == 1


def test_checkout_rejects_inactive_and_unknown_products(client, make_user, make_product, auth_headers):
    seller = make_user(role=UserRole.SELLER)
    headers = auth_headers(make_user())
    draft = make_product(seller, "draft", status=ProductStatus.DRAFT)

    for product_id in [draft, str(ObjectId()), "bogus"]:
        resp = client.post("/api/orders/", json={"items": [{"product_id": product_id, "quantity": 1}]},
                           headers=headers)
        assert resp.status_code == 404


def test_checkout_validation(client, make_user, make_product, auth_headers):
    seller = make_user(role=UserRole.SELLER)
    headers = auth_headers(make_user())
    lamp = make_product(seller, "lamp")

    assert client.post("/api/orders/", json={"items": []}, headers=headers).status_code == 400
    for quantity in [0, -1, "two", 1.5]:
        resp = client.post("/api/orders/", json={"items": [{"product_id": lamp, "quantity": quantity}]},
                           headers=headers)
        assert resp.status_code == 400


def test_checkout_requires_auth(client):
    assert client.post("/api/orders/", json={"items": []}).status_code == 401


def test_my_orders_lists_only_callers_orders(client, make_user, make_product, auth_headers):
    seller = make_user(role=UserRole.SELLER)
    buyer = make_user()
    someone_else = make_user()
    lamp = make_product(seller, "lamp")

    client.post("/api/orders/", json={"items": [{"product_id": lamp}]}, headers=auth_headers(buyer))
    client.post("/api/orders/", json={"items": [{"product_id": lamp}]}, headers=auth_headers(someone_else))

    resp = client.get("/api/orders/my-orders", headers=auth_headers(buyer))
    body = resp.get_json()
    assert body["count"] == 1
    assert body["orders"][0]["userId"] == buyer
    assert body["orders"][0]["items"][0]["quantity"] == 1
