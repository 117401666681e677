from conftest import PASSWORD

from cms.core.config import settings


def _login(client, email):
    return client.post("/admin/login", json={"email": email, "password": PASSWORD})


def test_unauthenticated_visit_redirects_to_login(client):
    res = client.get("/admin/projects", follow_redirects=False)

    assert res.status_code == 307
    assert res.headers["location"] == "/admin/login"
    # "/" içeren değerler tırnaklı yazılır
    assert client.cookies.get(settings.REDIRECT_COOKIE_NAME).strip('"') == "/admin/projects"


def test_login_restores_the_requested_page_once(client, admin):
    client.get("/admin/projects", follow_redirects=False)

    res = _login(client, admin.email)

    assert res.status_code == 200
    assert res.json()["redirect_to"] == "/admin/projects"
    assert client.cookies.get(settings.REDIRECT_COOKIE_NAME) is None

    page = client.get("/admin/projects", follow_redirects=False)
    assert page.status_code == 200
    assert page.json()["page"] == "projects"

    # ikinci girişte hatırlanan yol yok
    assert _login(client, admin.email).json()["redirect_to"] == "/admin"


def test_login_without_remembered_path_goes_to_landing(client, admin):
    assert _login(client, admin.email).json()["redirect_to"] == "/admin"


def test_non_admin_cannot_open_console(client, make_user):
    make_user("e@acme.com", role="editor")

    assert _login(client, "e@acme.com").status_code == 403
    assert client.get("/admin", follow_redirects=False).status_code == 307


def test_bad_credentials(client, admin):
    res = client.post("/admin/login", json={"email": admin.email, "password": "nope"})

    assert res.status_code == 401


def test_logout_destroys_session(client, admin):
    _login(client, admin.email)
    assert client.get("/admin", follow_redirects=False).status_code == 200

    client.post("/admin/logout")

    assert client.get("/admin", follow_redirects=False).status_code == 307


def test_deactivated_admin_session_is_rejected(client, db, make_user, admin):
    other = make_user("b@acme.com", role="admin")
    _login(client, other.email)
    other.is_active = False
    db.commit()

    assert client.get("/admin/users", follow_redirects=False).status_code == 307


def test_login_page_reports_session(client, admin):
    assert client.get("/admin/login").json() == {"page": "login", "authenticated": False}
    _login(client, admin.email)
    assert client.get("/admin/login").json()["authenticated"] is True
