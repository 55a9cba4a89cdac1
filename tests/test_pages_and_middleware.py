import pytest

from sapients.core.middleware import is_passthrough
from sapients.models.role import Role


@pytest.mark.parametrize("path", ["/login", "/api/auth/login", "/api/access", "/api/health", "/docs"])
def test_passthrough_paths(path):
    assert is_passthrough(path)


@pytest.mark.parametrize("path", ["/", "/dashboard", "/lore", "/concept-art/new"])
def test_protected_paths(path):
    assert not is_passthrough(path)


def test_page_without_cookie_redirects_to_login(client):
    resp = client.get("/lore", follow_redirects=False)
    assert resp.status_code == 307
    assert resp.headers["location"] == "/login"


def test_api_without_cookie_is_not_redirected(client):
    resp = client.get("/api/access", follow_redirects=False)
    assert resp.status_code == 401


def test_login_page_is_public(client):
    resp = client.get("/login", follow_redirects=False)
    assert resp.status_code == 200
    assert resp.json()["page"] == "login"


def test_forged_cookie_passes_middleware_but_not_guard(client):
    resp = client.get(
        "/dashboard",
        headers={"Cookie": "sapients_session=forged-token"},
        follow_redirects=False,
    )
    # Middleware lets it through; the page guard rejects it
    assert resp.status_code == 307
    assert resp.headers["location"] == "/login"


def test_forbidden_page_redirects_to_dashboard(client, login):
    login(Role.VIEWER)
    resp = client.get("/thoughts", follow_redirects=False)
    assert resp.status_code == 307
    assert resp.headers["location"] == "/dashboard"


def test_edit_page_redirects_to_module_page(client, login):
    login(Role.WRITER)
    resp = client.get("/entities/new", follow_redirects=False)
    assert resp.status_code == 307
    assert resp.headers["location"] == "/entities"


def test_allowed_pages_return_context(client, login):
    login(Role.CONCEPT_ARTIST)

    page = client.get("/concept-art").json()
    assert page["page"] == "concept-art"
    assert page["can_edit"] is True
    assert page["navigation"] == ["dashboard", "onboarding", "entities", "concept-art"]

    assert client.get("/concept-art/new", follow_redirects=False).status_code == 200
    assert client.get("/entities", follow_redirects=False).json()["can_edit"] is False


def test_root_redirects_to_dashboard(client, login):
    login(Role.VIEWER)
    resp = client.get("/", follow_redirects=False)
    assert resp.status_code == 307
    assert resp.headers["location"] == "/dashboard"


def test_responses_carry_request_id(client):
    resp = client.get("/api/health")
    assert resp.headers["x-request-id"]
