from conftest import register_user, auth_headers


def test_register_success(client):
    """Test : créer un utilisateur renvoie 201, le profil public et un token"""
    response = client.post("/auth/register", json={
        "name": "Ann",
        "email": "ann@example.com",
        "password": "Secr3t!1"
    })
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Ann"
    assert data["email"] == "ann@example.com"
    assert "id" in data
    assert "createdAt" in data
    assert data["token"]
    assert "password" not in data
    assert "passwordHash" not in data
    assert "password_hash" not in data


def test_register_lowercases_email(client):
    data = register_user(client, email="Ann.Smith@Example.COM")
    assert data["email"] == "ann.smith@example.com"


def test_register_duplicate_email_any_case(client):
    """Test : impossible de créer 2 users avec le même email, quelle que soit la casse"""
    register_user(client, email="ann@example.com")
    response = client.post("/auth/register", json={
        "name": "Other Ann",
        "email": "ANN@Example.com",
        "password": "password123"
    })
    assert response.status_code == 409
    assert response.json() == {"detail": "Email already registered"}


def test_register_missing_fields(client):
    for body in (
        {"name": "", "email": "a@example.com", "password": "pw"},
        {"name": "   ", "email": "a@example.com", "password": "pw"},
        {"name": "A", "email": "", "password": "pw"},
        {"name": "A", "email": "a@example.com", "password": ""},
        {"email": "a@example.com", "password": "pw"},
    ):
        response = client.post("/auth/register", json=body)
        assert response.status_code == 400, body
        assert isinstance(response.json()["detail"], str)


def test_register_rejects_overlong_password(client):
    response = client.post("/auth/register", json={
        "name": "Ann",
        "email": "ann@example.com",
        "password": "x" * 73
    })
    assert response.status_code == 400


def test_login_success(client):
    """Test : se connecter avec succès"""
    registered = register_user(client)
    response = client.post("/auth/login", json={
        "email": "ann@example.com",
        "password": "Secr3t!1"
    })
    assert response.status_code == 200
    data = response.json()
    assert data["token"]
    assert data["id"] == registered["id"]
    assert data["name"] == "Ann"


def test_login_email_case_insensitive(client):
    register_user(client)
    response = client.post("/auth/login", json={"email": "ANN@example.com", "password": "Secr3t!1"})
    assert response.status_code == 200


def test_login_failures_are_indistinguishable(client):
    """Email inconnu et mauvais password : même statut, même corps"""
    register_user(client)
    wrong_password = client.post("/auth/login", json={"email": "ann@example.com", "password": "wrong"})
    unknown_email = client.post("/auth/login", json={"email": "nobody@example.com", "password": "Secr3t!1"})

    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"detail": "Invalid email or password"}


def test_profile(client, auth_token):
    response = client.get("/auth/profile", headers=auth_headers(auth_token))
    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "ann@example.com"
    assert "token" not in data
    assert "passwordHash" not in data


def test_profile_requires_token(client):
    response = client.get("/auth/profile")
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_profile_of_deleted_user(client, db, auth_token):
    from taskboard.models.user import User

    db.query(User).delete()
    db.commit()

    response = client.get("/auth/profile", headers=auth_headers(auth_token))
    assert response.status_code == 404
    assert response.json() == {"detail": "User not found"}


def test_health_z(client):
    """Test : l'endpoint health fonctionne"""
    response = client.get("/health/z")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "ok"}


def test_login_with_malformed_email_is_invalid_credentials(client):
    """Email mal formé au login : même 401 que les autres échecs"""
    register_user(client)
    for email in ("ann", "", "@@"):
        response = client.post("/auth/login", json={"email": email, "password": "Secr3t!1"})
        assert response.status_code == 401, email
        assert response.json() == {"detail": "Invalid email or password"}
