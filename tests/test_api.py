from sqlalchemy.exc import OperationalError

from messagely.database import SessionLocal, get_db
from messagely.main import app


def register(client, username: str, password: str, **profile):
    return client.post("/register", json={"username": username, "password": password, **profile})


def login(client, username: str, password: str):
    return client.post("/login", json={"username": username, "password": password})


def test_root_is_alive(client):
    res = client.get("/")
    assert res.status_code == 200
    assert res.text == "APP IS WORKING!!"


def test_register_and_login_flow(client):
    res = register(client, "alice", "secret1", first_name="Alice", last_name="Smith", phone="555-0001")
    assert res.status_code == 200
    assert res.json() == {"username": "alice"}
    assert register(client, "bob", "secret2").status_code == 200

    ok = login(client, "alice", "secret1")
    assert ok.status_code == 200
    assert ok.json() == {"message": "Logged in!"}

    bad = login(client, "alice", "wrong")
    assert bad.status_code == 400
    assert bad.json() == {"error": {"message": "Invalid username/password", "status": 400}}

    again = register(client, "alice", "whatever")
    assert again.status_code == 400
    assert again.json()["error"] == {"message": "Username taken.", "status": 400}


def test_login_unknown_user_matches_wrong_password(client):
    register(client, "alice", "secret1")
    unknown = login(client, "nobody", "secret1")
    wrong = login(client, "alice", "nope")
    assert unknown.status_code == wrong.status_code == 400
    assert unknown.json() == wrong.json()


def test_missing_fields_are_rejected(client):
    for path in ("/login", "/register"):
        res = client.post(path, json={"username": "alice"})
        assert res.status_code == 400
        assert res.json()["error"]["message"] == "Username and password required"
        res = client.post(path, json={"username": "", "password": "secret1"})
        assert res.status_code == 400


def test_malformed_body_uses_error_envelope(client):
    res = client.post("/login", content="not json", headers={"Content-Type": "application/json"})
    assert res.status_code == 400
    assert res.json()["error"]["status"] == 400


def test_login_stamps_last_login(client):
    register(client, "alice", "secret1")
    assert client.get("/users/alice").json()["last_login_at"] is None
    login(client, "alice", "secret1")
    assert client.get("/users/alice").json()["last_login_at"] is not None


def test_users_and_messages(client):
    register(client, "alice", "secret1", first_name="Alice")
    register(client, "bob", "secret2", first_name="Bob", phone="555-0002")

    users = client.get("/users").json()
    assert [u["username"] for u in users] == ["alice", "bob"]
    assert "password" not in users[0]

    res = client.post("/messages", json={"from_username": "alice", "to_username": "bob", "body": "hello there"})
    assert res.status_code == 200
    msg = res.json()
    assert msg["from_username"] == "alice"
    assert msg["to_username"] == "bob"

    sent = client.get("/users/alice/from").json()
    assert sent == [
        {
            "id": msg["id"],
            "to_user": {"username": "bob", "first_name": "Bob", "last_name": None, "phone": "555-0002"},
            "body": "hello there",
            "sent_at": msg["sent_at"],
            "read_at": None,
        }
    ]
    received = client.get("/users/bob/to").json()
    assert received[0]["from_user"]["username"] == "alice"
    assert client.get("/users/alice/to").json() == []

    read = client.post(f"/messages/{msg['id']}/read")
    assert read.status_code == 200
    assert read.json()["read_at"] is not None
    assert client.get(f"/messages/{msg['id']}").json()["to_user"]["username"] == "bob"


def test_not_found_responses(client):
    res = client.get("/users/ghost")
    assert res.status_code == 404
    assert res.json() == {"error": {"message": "No such user: ghost", "status": 404}}
    assert client.get("/messages/42").status_code == 404
    assert client.get("/no/such/path").json()["error"]["status"] == 404

    register(client, "alice", "secret1")
    res = client.post("/messages", json={"from_username": "alice", "to_username": "ghost", "body": "hi"})
    assert res.status_code == 404
    res = client.post("/messages", json={"from_username": "alice", "to_username": "ghost"})
    assert res.status_code == 400


def test_oversized_credentials_rejected_with_envelope(client):
    res = register(client, "alice", "x" * 5000)
    assert res.status_code == 400
    assert res.json()["error"]["status"] == 400

    res = register(client, "a" * 65, "secret1")
    assert res.status_code == 400
    assert res.json()["error"]["status"] == 400
    assert client.get("/users").json() == []


def test_store_failure_is_500_envelope(client):
    def broken_db():
        session = SessionLocal()

        def fail(*args, **kwargs):
            raise OperationalError("SELECT users.username FROM users", {}, Exception("disk I/O error"))

        session.query = fail
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = broken_db
    try:
        res = client.get("/users")
    finally:
        app.dependency_overrides.clear()
    assert res.status_code == 500
    assert res.json() == {"error": {"message": "Database error", "status": 500}}


def test_wrong_method_keeps_allow_header(client):
    res = client.get("/login")
    assert res.status_code == 405
    assert "POST" in res.headers["allow"]
    assert res.json()["error"]["status"] == 405
