"""Tests for the admin HTTP API."""

from fastapi.testclient import TestClient

from wallpaper_admin.api.app import create_app
from wallpaper_admin.containers import AppContainer
from tests.conftest import (
    ADMIN_TOKEN,
    USER_TOKEN,
    InMemoryEntityRepository,
    InMemoryRoleRepository,
)

ADMIN_HEADERS = {"Authorization": f"Bearer {ADMIN_TOKEN}"}


def _client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))


def _wallpapers(container: AppContainer) -> InMemoryEntityRepository:
    repository = container.wallpaper_service.repository
    assert isinstance(repository, InMemoryEntityRepository)
    return repository


def test_health_is_public(container: AppContainer) -> None:
    response = _client(container).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_admin_routes_require_admin(container: AppContainer) -> None:
    client = _client(container)

    anonymous = client.get("/wallpapers")
    regular = client.get(
        "/wallpapers", headers={"Authorization": f"Bearer {USER_TOKEN}"}
    )
    admin = client.get("/wallpapers", headers=ADMIN_HEADERS)

    assert anonymous.status_code == 401
    assert regular.status_code == 403
    assert admin.status_code == 200


def test_session_endpoint_reports_outcome(container: AppContainer) -> None:
    client = _client(container)

    admin = client.get("/auth/session", headers=ADMIN_HEADERS).json()
    anonymous = client.get("/auth/session").json()

    assert admin["outcome"] == "allow"
    assert admin["role"] == "admin"
    assert admin["identity"]["id"] == "admin-1"
    assert anonymous["outcome"] == "redirect_login"
    assert anonymous["identity"] is None


def test_wallpaper_pages_follow_cursor(container: AppContainer) -> None:
    repository = _wallpapers(container)
    for index in range(25):
        repository.add(name=f"Wallpaper {index}")
    client = _client(container)

    first = client.get("/wallpapers", headers=ADMIN_HEADERS).json()
    second = client.get(
        "/wallpapers", params={"cursor": first["cursor"]}, headers=ADMIN_HEADERS
    ).json()

    assert len(first["items"]) == 20
    assert first["has_more"] is True
    assert len(second["items"]) == 5
    assert second["has_more"] is False
    assert first["items"][0]["name"] == "Wallpaper 24"


def test_wallpaper_list_filters_and_search(container: AppContainer) -> None:
    repository = _wallpapers(container)
    repository.add(name="Aurora", status="approved")
    repository.add(name="Autumn", status="pending")
    repository.add(name="Desert", status="approved")
    client = _client(container)

    response = client.get(
        "/wallpapers",
        params={"q": "au", "status": "approved"},
        headers=ADMIN_HEADERS,
    )

    assert response.status_code == 200
    assert [item["name"] for item in response.json()["items"]] == ["Aurora"]


def test_bad_cursor_is_rejected(container: AppContainer) -> None:
    response = _client(container).get(
        "/wallpapers", params={"cursor": "garbage"}, headers=ADMIN_HEADERS
    )

    assert response.status_code == 400


def test_unknown_wallpaper_is_404(container: AppContainer) -> None:
    response = _client(container).get("/wallpapers/missing", headers=ADMIN_HEADERS)

    assert response.status_code == 404
    assert response.json()["detail"] == "Wallpaper not found"


def test_store_failure_is_502_with_notices(container: AppContainer) -> None:
    _wallpapers(container).fail_reads = True

    response = _client(container).get("/wallpapers", headers=ADMIN_HEADERS)

    assert response.status_code == 502
    notices = response.json()["detail"]["notices"]
    assert notices[0]["variant"] == "destructive"


def test_edit_validation(container: AppContainer) -> None:
    wallpaper = _wallpapers(container).add(name="Original")
    client = _client(container)

    empty_name = client.patch(
        f"/wallpapers/{wallpaper.id}", json={"name": ""}, headers=ADMIN_HEADERS
    )
    too_many_tags = client.patch(
        f"/wallpapers/{wallpaper.id}",
        json={"tags": [f"tag{index}" for index in range(31)]},
        headers=ADMIN_HEADERS,
    )
    long_description = client.patch(
        f"/wallpapers/{wallpaper.id}",
        json={"description": "x" * 1001},
        headers=ADMIN_HEADERS,
    )

    assert empty_name.status_code == 422
    assert too_many_tags.status_code == 422
    assert long_description.status_code == 422
    assert _wallpapers(container).records[wallpaper.id].name == "Original"


def test_edit_and_status_change(container: AppContainer) -> None:
    wallpaper = _wallpapers(container).add(name="Original")
    client = _client(container)

    edited = client.patch(
        f"/wallpapers/{wallpaper.id}",
        json={"name": "Renamed", "tags": ["Night"]},
        headers=ADMIN_HEADERS,
    )
    approved = client.post(
        f"/wallpapers/{wallpaper.id}/status",
        json={"status": "approved"},
        headers=ADMIN_HEADERS,
    )

    assert edited.status_code == 200
    assert edited.json()["item"]["name"] == "Renamed"
    assert edited.json()["notices"][0]["title"] == "Changes saved"
    assert approved.json()["item"]["status"] == "approved"


def test_bulk_status_endpoint(container: AppContainer) -> None:
    repository = _wallpapers(container)
    ids = [repository.add(name=f"W{index}").id for index in range(3)]
    repository.failing_ids.add(ids[0])

    response = _client(container).post(
        "/wallpapers/bulk-status",
        json={"ids": ids, "status": "rejected"},
        headers=ADMIN_HEADERS,
    )

    body = response.json()
    assert response.status_code == 200
    assert body["failed"] == [ids[0]]
    assert sorted(body["updated"]) == sorted(ids[1:])
    assert len(body["notices"]) == 1


def test_create_and_delete_wallpaper(container: AppContainer) -> None:
    client = _client(container)

    created = client.post(
        "/wallpapers",
        json={"name": "Fresh", "image": "fresh.png", "tags": ["Green"]},
        headers=ADMIN_HEADERS,
    )
    wallpaper_id = created.json()["item"]["id"]
    deleted = client.delete(f"/wallpapers/{wallpaper_id}", headers=ADMIN_HEADERS)
    missing = client.delete(f"/wallpapers/{wallpaper_id}", headers=ADMIN_HEADERS)

    assert created.status_code == 201
    assert created.json()["item"]["status"] == "pending"
    assert "green" in created.json()["item"]["search_tags"]
    assert deleted.status_code == 200
    assert missing.status_code == 404


def test_tag_search_endpoint(container: AppContainer) -> None:
    client = _client(container)
    client.post(
        "/wallpapers",
        json={"name": "Blue Lagoon", "image": "a.png"},
        headers=ADMIN_HEADERS,
    )
    client.post(
        "/wallpapers",
        json={"name": "Red Rock", "image": "b.png"},
        headers=ADMIN_HEADERS,
    )

    response = client.get("/wallpapers/tags/lagoon", headers=ADMIN_HEADERS)

    assert [item["name"] for item in response.json()["items"]] == ["Blue Lagoon"]


def test_categories_endpoints(container: AppContainer) -> None:
    client = _client(container)
    for name in ("Space", "Abstract"):
        client.post("/categories", json={"name": name}, headers=ADMIN_HEADERS)

    listing = client.get("/categories", headers=ADMIN_HEADERS).json()
    category_id = listing["items"][0]["id"]
    renamed = client.patch(
        f"/categories/{category_id}",
        json={"name": "Art"},
        headers=ADMIN_HEADERS,
    )

    assert [item["name"] for item in listing["items"]] == ["Abstract", "Space"]
    assert listing["items"][0]["wallpaper_count"] == 0
    assert renamed.json()["item"]["name"] == "Art"


def test_collection_endpoints(container: AppContainer) -> None:
    repository = _wallpapers(container)
    kept = repository.add(name="Kept")
    dropped = repository.add(name="Dropped")
    client = _client(container)

    created = client.post(
        "/collections", json={"name": "Picks"}, headers=ADMIN_HEADERS
    ).json()["item"]
    client.post(
        f"/collections/{created['id']}/wallpapers",
        json={"ids": [kept.id, dropped.id]},
        headers=ADMIN_HEADERS,
    )
    client.delete(f"/wallpapers/{dropped.id}", headers=ADMIN_HEADERS)
    detail = client.get(f"/collections/{created['id']}", headers=ADMIN_HEADERS).json()

    assert created["created_by"] == "admin-1"
    assert created["wallpaper_ids"] == []
    assert [item["id"] for item in detail["wallpapers"]] == [kept.id]
    assert detail["missing_ids"] == [dropped.id]


def test_users_endpoints(container: AppContainer) -> None:
    repository = container.user_service.repository
    assert isinstance(repository, InMemoryEntityRepository)
    repository.add(id="u1", display_name="Zed", role="user")
    repository.add(id="u2", display_name="Amy", role="admin")
    client = _client(container)

    admins = client.get(
        "/users", params={"role": "admin"}, headers=ADMIN_HEADERS
    ).json()
    promoted = client.patch(
        "/users/u1/role", json={"role": "admin"}, headers=ADMIN_HEADERS
    ).json()
    invalid = client.patch(
        "/users/u1/role", json={"role": "owner"}, headers=ADMIN_HEADERS
    )

    assert [item["id"] for item in admins["items"]] == ["u2"]
    assert promoted["item"]["role"] == "admin"
    assert invalid.status_code == 422


def test_dashboard_endpoint(container: AppContainer) -> None:
    repository = _wallpapers(container)
    repository.add(name="One", status="pending")
    repository.add(name="Two", status="approved")

    body = _client(container).get("/dashboard", headers=ADMIN_HEADERS).json()

    assert body["pending_count"] == 1
    assert body["approved_count"] == 1
    assert body["total_count"] == 2
    assert [item["name"] for item in body["recent_wallpapers"]] == ["Two", "One"]


def test_partial_category_and_collection_updates(container: AppContainer) -> None:
    client = _client(container)
    category = client.post(
        "/categories", json={"name": "Space"}, headers=ADMIN_HEADERS
    ).json()["item"]
    collection = client.post(
        "/collections", json={"name": "Picks"}, headers=ADMIN_HEADERS
    ).json()["item"]

    category_edit = client.patch(
        f"/categories/{category['id']}",
        json={"description": "new"},
        headers=ADMIN_HEADERS,
    )
    collection_edit = client.patch(
        f"/collections/{collection['id']}",
        json={"cover_image": "cover.png"},
        headers=ADMIN_HEADERS,
    )

    assert category_edit.status_code == 200
    assert category_edit.json()["item"]["name"] == "Space"
    assert category_edit.json()["item"]["description"] == "new"
    assert collection_edit.status_code == 200
    assert collection_edit.json()["item"]["name"] == "Picks"
    assert collection_edit.json()["item"]["cover_image"] == "cover.png"


def test_collection_type_is_manual_or_auto(container: AppContainer) -> None:
    client = _client(container)

    auto = client.post(
        "/collections", json={"name": "Trending", "type": "auto"}, headers=ADMIN_HEADERS
    )
    bogus = client.post(
        "/collections", json={"name": "Odd", "type": "smart"}, headers=ADMIN_HEADERS
    )

    assert auto.status_code == 201
    assert auto.json()["item"]["type"] == "auto"
    assert bogus.status_code == 422


def test_admin_session_survives_transient_role_lookup_failure(
    container: AppContainer,
) -> None:
    role_repository = container.auth_service.role_repository
    assert isinstance(role_repository, InMemoryRoleRepository)
    role_repository.roles["user-1"] = "admin"
    client = _client(container)
    user_headers = {"Authorization": f"Bearer {USER_TOKEN}"}

    role_repository.fail = True
    during_outage = client.get("/dashboard", headers=user_headers)
    role_repository.fail = False
    after_outage = client.get("/dashboard", headers=user_headers)

    assert during_outage.status_code == 403
    assert after_outage.status_code == 200


def test_user_profile_endpoints(container: AppContainer) -> None:
    users = container.user_service.repository
    assert isinstance(users, InMemoryEntityRepository)
    users.add(id="u1", display_name="Zed", role="user", bio="Old bio")
    wallpapers = _wallpapers(container)
    wallpapers.add(name="Mine", uploaded_by="u1")
    wallpapers.add(name="Theirs", uploaded_by="u2")
    client = _client(container)

    detail = client.get("/users/u1", headers=ADMIN_HEADERS)
    edited = client.patch(
        "/users/u1",
        json={"username": "zed", "bio": "Night skies"},
        headers=ADMIN_HEADERS,
    )
    uploads = client.get("/users/u1/wallpapers", headers=ADMIN_HEADERS)
    missing = client.get("/users/nobody", headers=ADMIN_HEADERS)

    assert detail.json()["item"]["bio"] == "Old bio"
    assert edited.json()["item"]["username"] == "zed"
    assert edited.json()["item"]["bio"] == "Night skies"
    assert edited.json()["item"]["display_name"] == "Zed"
    assert [item["name"] for item in uploads.json()["items"]] == ["Mine"]
    assert missing.status_code == 404
