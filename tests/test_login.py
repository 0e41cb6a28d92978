import httpx
from unittest.mock import patch
from n8n_relay import config
from tests.upstream import upstream_response


def test_login_success_rewrites_cookies(client, mock_upstream):
    mock_upstream.return_value = upstream_response(
        200,
        json={"data": {"id": "u1", "email": "a@b.com"}},
        headers=[("set-cookie", "n8n-auth=tok; Path=/; HttpOnly; Max-Age=3600")],
    )

    response = client.post("/api/login", json={"email": "a@b.com", "password": "x"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Authentication successful"
    assert body["data"] == {"data": {"id": "u1", "email": "a@b.com"}}
    assert body["cookies"] == ["n8n-auth=tok; Path=/; HttpOnly; Max-Age=3600"]
    assert body["status"] == 200

    set_cookies = response.headers.get_list("set-cookie")
    assert len(set_cookies) == 1
    assert set_cookies[0].startswith("n8n-auth=tok; Max-Age=3600; Path=/; ")
    assert set_cookies[0].endswith("; SameSite=Lax")
    assert "HttpOnly" not in set_cookies[0]
    assert "Secure" not in set_cookies[0]


def test_login_maps_fields_for_upstream(client, mock_upstream):
    mock_upstream.return_value = upstream_response(200, json={})

    client.post("/api/login", json={"email": "a@b.com", "password": "secret"})

    assert mock_upstream.await_count == 1
    args, kwargs = mock_upstream.call_args
    assert args == ("POST", config.N8N_LOGIN_ENDPOINT)
    assert kwargs["json"] == {"emailOrLdapLoginId": "a@b.com", "password": "secret"}
    assert kwargs["timeout"] == config.LOGIN_TIMEOUT


def test_login_one_cookie_out_per_cookie_in(client, mock_upstream):
    mock_upstream.return_value = upstream_response(
        200,
        json={},
        headers=[("set-cookie", "n8n-auth=tok"), ("set-cookie", "other=1; Path=/rest; Max-Age=60")],
    )

    response = client.post("/api/login", json={"email": "a@b.com", "password": "x"})

    set_cookies = response.headers.get_list("set-cookie")
    assert len(set_cookies) == 2
    assert set_cookies[0].startswith("n8n-auth=tok; Max-Age=604800; Path=/;")
    assert set_cookies[1].startswith("other=1; Max-Age=60; Path=/rest;")


def test_login_missing_password(client, mock_upstream):
    response = client.post("/api/login", json={"email": "a@b.com"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Email and password are required"}
    assert mock_upstream.await_count == 0


def test_login_empty_body(client, mock_upstream):
    response = client.post("/api/login")

    assert response.status_code == 400
    assert response.json()["error"] == "Email and password are required"
    assert mock_upstream.await_count == 0


def test_login_invalid_credentials(client, mock_upstream):
    mock_upstream.return_value = upstream_response(401, json={"code": 401, "message": "Wrong username or password"})

    response = client.post("/api/login", json={"email": "a@b.com", "password": "bad"})

    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Invalid credentials provided."
    assert body["details"] == {"code": 401, "message": "Wrong username or password"}
    assert "set-cookie" not in response.headers


def test_login_upstream_unreachable(client, mock_upstream):
    mock_upstream.side_effect = httpx.ConnectError("Connection refused")

    response = client.post("/api/login", json={"email": "a@b.com", "password": "x"})

    assert response.status_code == 503
    assert "Cannot connect to n8n server" in response.json()["error"]


def test_login_timeout_is_not_retried(client, mock_upstream):
    mock_upstream.side_effect = httpx.ReadTimeout("timed out")

    response = client.post("/api/login", json={"email": "a@b.com", "password": "x"})

    assert response.status_code == 500
    error = response.json()["error"]
    assert "timed out" in error
    assert "try again" in error
    assert mock_upstream.await_count == 1


def test_login_other_status_passes_through(client, mock_upstream):
    mock_upstream.return_value = upstream_response(429, json={"message": "Too many login attempts"})

    response = client.post("/api/login", json={"email": "a@b.com", "password": "x"})

    assert response.status_code == 429
    assert response.json()["error"] == "Too many login attempts"


def test_login_other_status_without_message(client, mock_upstream):
    mock_upstream.return_value = upstream_response(502)

    response = client.post("/api/login", json={"email": "a@b.com", "password": "x"})

    assert response.status_code == 502
    assert response.json()["error"] == "n8n server error: 502"


def test_login_with_huge_max_age_still_sets_cookie(client, mock_upstream):
    mock_upstream.return_value = upstream_response(
        200, json={}, headers=[("set-cookie", "n8n-auth=tok; Max-Age=999999999999")]
    )

    response = client.post("/api/login", json={"email": "a@b.com", "password": "x"})

    assert response.status_code == 200
    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith("n8n-auth=tok; Max-Age=999999999999; Path=/;")
    assert "Expires=Fri, 31 Dec 9999 23:59:59 GMT" in set_cookie


def test_login_uses_configured_cookie_policy(client, mock_upstream):
    mock_upstream.return_value = upstream_response(200, json={}, headers=[("set-cookie", "n8n-auth=tok")])

    with patch("n8n_relay.config.COOKIE_HTTPONLY", True), patch("n8n_relay.config.COOKIE_SECURE", True), \
            patch("n8n_relay.config.COOKIE_SAMESITE", "Strict"):
        response = client.post("/api/login", json={"email": "a@b.com", "password": "x"})

    set_cookie = response.headers["set-cookie"]
    assert set_cookie.endswith("; HttpOnly; Secure; SameSite=Strict")


def test_login_wrongly_typed_field(client, mock_upstream):
    response = client.post("/api/login", json={"email": "a@b.com", "password": 123})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Invalid value for field(s): password"
    assert mock_upstream.await_count == 0


def test_login_body_not_an_object(client, mock_upstream):
    response = client.post("/api/login", json=["a@b.com", "x"])

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Request body must be a JSON object"}
    assert mock_upstream.await_count == 0


def test_login_body_not_json(client, mock_upstream):
    response = client.post("/api/login", content="email=a@b.com", headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert response.json()["error"] == "Request body must be a JSON object"
    assert mock_upstream.await_count == 0
