"""
End-to-end tests through the HTTP API.
"""

import pytest
from fastapi.testclient import TestClient

from staybook.api.app import create_app
from staybook.storage import LocalContentStorage, StorageProvider

from tests.test_services import BrokenStorage


ANN = {"name": "Ann", "email": "ann@x.com", "password": "secret1"}
BOB = {"name": "Bob", "email": "bob@x.com", "password": "secret2"}

LOFT = {
    "title": "Sunny Loft",
    "address": "1 Main St",
    "addedPhotos": ["/uploads/1_loft.jpg"],
    "description": "Bright and quiet",
    "perks": ["wifi", "parking"],
    "extraInfo": "No parties",
    "checkIn": 14,
    "checkOut": 11,
    "maxGuests": 2,
    "price": 120,
}


def register_and_login(client: TestClient, user: dict) -> str:
    """Register and log in; returns the user id. Cookie stays in the client."""
    assert client.post("/api/register", json=user).status_code == 200
    response = client.post(
        "/api/login", json={"email": user["email"], "password": user["password"]}
    )
    assert response.status_code == 200
    return response.json()["id"]


def create_place(client: TestClient, **overrides) -> dict:
    response = client.post("/api/places", json={**LOFT, **overrides})
    assert response.status_code == 200
    return response.json()


# =============================================================================
# Registration / Login / Profile
# =============================================================================


class TestAccounts:
    def test_register_hides_password(self, client):
        response = client.post("/api/register", json=ANN)

        assert response.status_code == 200
        body = response.json()
        assert set(body) == {"id", "name", "email"}
        assert body["name"] == "Ann"
        assert body["email"] == "ann@x.com"
        assert "set-cookie" not in response.headers

    def test_register_twice_conflicts(self, client):
        client.post("/api/register", json=ANN)
        response = client.post("/api/register", json=ANN)

        assert response.status_code == 409
        assert response.json()["kind"] == "conflict"

    def test_register_invalid_input(self, client):
        response = client.post(
            "/api/register", json={"name": "", "email": "not-an-email", "password": "topsecret"}
        )

        assert response.status_code == 422
        body = response.json()
        assert body["kind"] == "validation_failure"
        assert body["errors"]
        assert "topsecret" not in response.text

    def test_login_sets_session_and_profile_reads_it(self, client):
        client.post("/api/register", json=ANN)
        response = client.post("/api/login", json={"email": "ann@x.com", "password": "secret1"})

        assert response.status_code == 200
        assert set(response.json()) == {"id", "name", "email"}
        cookie = response.headers["set-cookie"].lower()
        assert cookie.startswith("token=")
        assert "httponly" in cookie
        assert "samesite=strict" in cookie

        profile = client.get("/api/profile")
        assert profile.status_code == 200
        assert profile.json() == {"name": "Ann", "email": "ann@x.com", "id": response.json()["id"]}

    def test_login_email_is_case_insensitive(self, client):
        client.post("/api/register", json=ANN)
        response = client.post("/api/login", json={"email": "ANN@x.com", "password": "secret1"})
        assert response.status_code == 200

    def test_wrong_password_is_generic(self, client):
        client.post("/api/register", json=ANN)

        wrong_password = client.post(
            "/api/login", json={"email": "ann@x.com", "password": "wrong"}
        )
        unknown_email = client.post(
            "/api/login", json={"email": "nobody@x.com", "password": "secret1"}
        )

        assert wrong_password.status_code == 401
        assert unknown_email.status_code == 401
        assert wrong_password.json() == unknown_email.json()
        assert wrong_password.json()["kind"] == "unauthorized"
        assert "set-cookie" not in wrong_password.headers
        assert client.get("/api/profile").json() is None

    def test_anonymous_profile_is_null(self, client):
        response = client.get("/api/profile")
        assert response.status_code == 200
        assert response.json() is None

    def test_logout_expires_cookie(self, client):
        register_and_login(client, ANN)

        response = client.post("/api/logout")

        assert response.status_code == 200
        assert response.json() is True
        cookie = response.headers["set-cookie"].lower()
        assert cookie.startswith('token=""') or cookie.startswith("token=;")
        assert "max-age=0" in cookie


# =============================================================================
# Session credential handling
# =============================================================================


class TestCredentials:
    @pytest.mark.parametrize("token", ["garbage", "a.b.c"])
    def test_invalid_credential_on_private_endpoints(self, client, token):
        client.cookies.set("token", token)

        for method, path in [
            ("get", "/api/user-places"),
            ("get", "/api/bookings"),
            ("get", "/api/profile"),
        ]:
            response = getattr(client, method)(path)
            assert response.status_code == 401
            assert response.json() == {"kind": "unauthorized", "message": "Authentication required"}

        response = client.post("/api/places", json=LOFT)
        assert response.status_code == 401

    def test_invalid_credential_on_public_endpoints(self, client):
        client.cookies.set("token", "garbage")

        assert client.get("/api/places").status_code == 200
        assert client.get("/api/test").json() == "Test OK"

    def test_forged_token_rejected(self, client):
        from staybook.auth.tokens import SessionClaim, issue_token

        forged = issue_token(
            SessionClaim(id="user_ann", email="ann@x.com"), "attacker-secret-0123456789abcdef"
        )
        client.cookies.set("token", forged)

        assert client.get("/api/user-places").status_code == 401

    def test_no_credential(self, client):
        assert client.get("/api/user-places").status_code == 401
        assert client.post("/api/bookings", json={}).status_code in (401, 422)


# =============================================================================
# Places
# =============================================================================


class TestPlaces:
    def test_create_and_read(self, client):
        ann_id = register_and_login(client, ANN)

        place = create_place(client)

        assert place["owner"] == ann_id
        assert place["photos"] == ["/uploads/1_loft.jpg"]
        assert place["maxGuests"] == 2
        assert place["extraInfo"] == "No parties"
        assert place["checkIn"] == 14
        assert "max_guests" not in place
        assert client.get(f"/api/places/{place['id']}").json() == place
        assert client.get("/api/user-places").json() == [place]
        assert client.get("/api/places").json() == [place]

    def test_missing_place(self, client):
        response = client.get("/api/places/place_missing")
        assert response.status_code == 404
        assert response.json()["kind"] == "not_found"

    def test_owner_update(self, client):
        ann_id = register_and_login(client, ANN)
        place = create_place(client)

        response = client.put(
            "/api/places",
            json={**LOFT, "id": place["id"], "title": "Sunnier Loft", "owner": "user_someone"},
        )

        assert response.status_code == 200
        assert response.json() == "ok"
        reread = client.get(f"/api/places/{place['id']}").json()
        assert reread["title"] == "Sunnier Loft"
        assert reread["owner"] == ann_id

    def test_non_owner_update_forbidden(self, client, other_client):
        register_and_login(client, ANN)
        place = create_place(client)
        register_and_login(other_client, BOB)

        response = other_client.put(
            "/api/places", json={"id": place["id"], "title": "Mine now", "price": 1}
        )

        assert response.status_code == 403
        assert response.json()["kind"] == "forbidden"
        assert client.get(f"/api/places/{place['id']}").json() == place

    def test_update_missing_place(self, client):
        register_and_login(client, ANN)
        response = client.put("/api/places", json={"id": "place_missing", "title": "x"})
        assert response.status_code == 404

    def test_listings_return_every_place(self, client):
        register_and_login(client, ANN)
        for i in range(150):
            create_place(client, title=f"Loft {i}")

        assert len(client.get("/api/places").json()) == 150
        assert len(client.get("/api/user-places").json()) == 150


# =============================================================================
# Bookings
# =============================================================================


class TestBookings:
    def test_booking_bound_to_booker(self, client, other_client):
        register_and_login(client, ANN)
        place = create_place(client)
        bob_id = register_and_login(other_client, BOB)

        response = other_client.post("/api/bookings", json={
            "place": place["id"],
            "checkIn": "2026-07-01",
            "checkOut": "2026-07-04",
            "numberOfGuests": 2,
            "name": "Bob",
            "phone": "555-0100",
            "price": 360,
            "user": "user_ann",
        })

        assert response.status_code == 200
        booking = response.json()
        assert booking["user"] == bob_id
        assert booking["place"] == place["id"]
        assert booking["checkIn"] == "2026-07-01"
        assert booking["numberOfGuests"] == 2
        assert "createdAt" in booking

        listed = other_client.get("/api/bookings").json()
        assert len(listed) == 1
        assert listed[0]["place"]["title"] == "Sunny Loft"
        assert listed[0]["place"]["maxGuests"] == 2
        assert client.get("/api/bookings").json() == []

    def test_bad_dates(self, client):
        register_and_login(client, ANN)
        place = create_place(client)

        response = client.post("/api/bookings", json={
            "place": place["id"],
            "checkIn": "2026-07-04",
            "checkOut": "2026-07-01",
            "name": "Ann",
            "phone": "555",
        })

        assert response.status_code == 422


# =============================================================================
# Uploads / infrastructure
# =============================================================================


class TestUploads:
    def test_upload_files(self, client):
        register_and_login(client, ANN)

        response = client.post(
            "/api/upload",
            files=[
                ("photos", ("front door.jpg", b"front-bytes", "image/jpeg")),
                ("photos", ("../kitchen.png", b"kitchen-bytes", "image/png")),
            ],
        )

        assert response.status_code == 200
        paths = response.json()
        assert len(paths) == 2
        assert paths[0].startswith("/uploads/") and paths[0].endswith("_front_door.jpg")
        assert paths[1].endswith("_kitchen.png")
        assert client.get(paths[0]).content == b"front-bytes"

    def test_upload_requires_session(self, client):
        response = client.post(
            "/api/upload", files=[("photos", ("a.jpg", b"x", "image/jpeg"))]
        )
        assert response.status_code == 401


class TestInfrastructure:
    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"

    def test_store_outage_is_503(self, settings, tmp_path):
        storage = StorageProvider(
            content=LocalContentStorage(str(tmp_path / "up")),
            metadata=BrokenStorage(),
        )
        client = TestClient(create_app(settings=settings, storage=storage))

        response = client.get("/api/places")

        assert response.status_code == 503
        assert response.json()["kind"] == "store_unavailable"
