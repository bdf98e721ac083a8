from devcircle.models import User


def register(client, username="ada", email="ada@devcircle.io", password="secret"):
    return client.post(
        "/api/auth/register",
        json={"username": username, "email": email, "password": password},
    )


def test_register_creates_user_and_profile(client, session_factory):
    response = register(client)
    assert response.status_code == 201
    assert response.json() == {"message": "User created successfully"}

    with session_factory() as db:
        user = db.query(User).filter(User.email == "ada@devcircle.io").one()
        assert user.password != "secret"
        assert user.profile is not None
        assert user.profile.onboarding_completed is False


def test_register_duplicate_email_is_conflict(client):
    assert register(client, email="Ada@devcircle.io").status_code == 201
    response = register(client, username="other", email="ada@devcircle.io")
    assert response.status_code == 409
    assert response.json()["message"] == "Error user already exists"


def test_register_then_login_with_lowercased_email(client):
    assert register(client, username="a", email="A@devcircle.io", password="p").status_code == 201

    response = client.post("/api/auth/login", json={"email": "a@devcircle.io", "password": "p"})
    assert response.status_code == 200
    body = response.json()
    assert body["email"] == "a@devcircle.io"
    assert body["username"] == "a"
    assert "password" not in body
    assert "profile" not in body

    response = client.post("/api/auth/login", json={"email": "a@devcircle.io", "password": "wrong"})
    assert response.status_code == 400
    assert response.json()["message"] == "Incorrect email or password"


def test_login_unknown_email(client):
    response = client.post("/api/auth/login", json={"email": "nobody@devcircle.io", "password": "p"})
    assert response.status_code == 400
    assert response.json()["message"] == "No user found"


def test_social_account_never_matches_a_password(client):
    response = client.post("/api/auth/register/social", json={"name": "grace", "email": "Grace@devcircle.io"})
    assert response.status_code == 201

    response = client.post("/api/auth/login", json={"email": "grace@devcircle.io", "password": ""})
    assert response.status_code == 400
    assert response.json()["message"] == "Incorrect email or password"


def test_social_register_duplicate_is_conflict(client):
    register(client, email="grace@devcircle.io")
    response = client.post("/api/auth/register/social", json={"name": "grace", "email": "grace@devcircle.io"})
    assert response.status_code == 409


def test_user_lookup_embeds_profile(client):
    register(client)
    response = client.post("/api/auth/user", json={"email": "ada@devcircle.io"})
    assert response.status_code == 200
    body = response.json()
    assert body["username"] == "ada"
    assert body["profile"]["onboarding_completed"] is False


def test_user_lookup_unknown_email_is_not_found(client):
    response = client.post("/api/auth/user", json={"email": "ghost@devcircle.io"})
    assert response.status_code == 404
    assert response.json()["message"] == "User not found"


def test_invalid_body_is_bad_request(client):
    response = client.post("/api/auth/register", json={"username": "ada", "email": "not-an-email"})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid request"
