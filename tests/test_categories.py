from models.user import UserRole


def test_list_active_categories_roots_first(client, make_category):
    make_category(name="Lamps", slug="lamps", level=1)
    make_category(name="Home", slug="home")
    make_category(name="Archive", slug="archive", is_active=False)

    resp = client.get("/api/categories/")
    assert resp.status_code == 200
    assert [c["slug"] for c in resp.get_json()["categories"]] == ["home", "lamps"]


def test_child_level_derives_from_parent(client, make_user, auth_headers):
    headers = auth_headers(make_user(role=UserRole.ADMIN))

    root = client.post("/api/categories/", json={"name": "Home", "slug": "home"}, headers=headers)
    root_id = root.get_json()["category"]["_id"]
    child = client.post("/api/categories/", json={"name": "Lamps", "slug": "lamps", "parent_id": root_id},
                        headers=headers)
    child_id = child.get_json()["category"]["_id"]
    grandchild = client.post("/api/categories/", json={"name": "Desk", "slug": "desk", "parent_id": child_id},
                             headers=headers)

    assert root.get_json()["category"]["level"] == 0
    assert child.get_json()["category"]["level"] == 1
    assert child.get_json()["category"]["parentId"] == root_id
    assert grandchild.get_json()["category"]["level"] == 2


def test_unknown_parent(client, make_user, auth_headers):
    headers = auth_headers(make_user(role=UserRole.ADMIN))
    for parent_id in ["64b000000000000000000000", "garbage"]:
        resp = client.post("/api/categories/", json={"name": "X", "slug": "x", "parent_id": parent_id},
                           headers=headers)
        assert resp.status_code == 404


def test_duplicate_slug(client, make_user, auth_headers):
    headers = auth_headers(make_user(role=UserRole.ADMIN))
    client.post("/api/categories/", json={"name": "Home", "slug": "home"}, headers=headers)
    resp = client.post("/api/categories/", json={"name": "Home 2", "slug": "home"}, headers=headers)
    assert resp.status_code == 409


def test_missing_fields(client, make_user, auth_headers):
    headers = auth_headers(make_user(role=UserRole.ADMIN))
    resp = client.post("/api/categories/", json={"name": "Home"}, headers=headers)
    assert resp.status_code == 400
    assert "slug is required" in resp.get_json()["errors"]
