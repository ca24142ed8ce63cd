"""User administration, customer profiles and profile image upload."""
from pathlib import Path

from pharmacy.core.config import settings
from pharmacy.core.exceptions import StorageConstraintError
from pharmacy.services import user_service

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def _create_user(client, email="rx@medplus.in", role="Pharmacist", full_name="Priya Shah"):
    return client.post(
        "/users",
        json={"fullName": full_name, "email": email, "password": "Secret123", "role": role},
    )


def test_roles_dropdown(client):
    assert client.get("/users/rolesDropDown").json() == ["Admin", "Pharmacist", "Customer"]


def test_user_crud(client):
    resp = _create_user(client)
    assert resp.status_code == 201
    user_id = resp.json()["id"]
    assert resp.headers["location"].endswith(f"/users/{user_id}")
    assert "password" not in resp.json()
    assert "hashedPassword" not in resp.json()

    update = client.put(
        f"/users/{user_id}",
        json={"fullName": "Priya S", "email": "priya@medplus.in", "role": "admin"},
    )
    assert update.status_code == 204
    user = client.get(f"/users/{user_id}").json()
    assert user["fullName"] == "Priya S"
    assert user["email"] == "priya@medplus.in"
    assert user["role"] == "Admin"
    assert user["createdAt"]

    assert client.delete(f"/users/{user_id}").status_code == 204
    assert client.get(f"/users/{user_id}").status_code == 404
    assert client.delete(f"/users/{user_id}").status_code == 404


def test_password_change_takes_effect(client):
    user_id = _create_user(client).json()["id"]

    client.put(
        f"/users/{user_id}",
        json={"fullName": "Priya Shah", "email": "rx@medplus.in", "role": "Pharmacist", "password": "NewSecret9"},
    )

    assert client.post("/auth/login", json={"email": "rx@medplus.in", "password": "Secret123"}).status_code == 401
    assert client.post("/auth/login", json={"email": "rx@medplus.in", "password": "NewSecret9"}).status_code == 200


def test_duplicate_user_email(client):
    _create_user(client)

    resp = _create_user(client, full_name="Another")

    assert resp.status_code == 409
    assert len(client.get("/users").json()) == 1


def test_update_to_taken_email_is_conflict(client):
    _create_user(client, email="one@medplus.in")
    second = _create_user(client, email="two@medplus.in").json()["id"]

    resp = client.put(f"/users/{second}", json={"fullName": "Two", "email": "one@medplus.in", "role": "Pharmacist"})

    assert resp.status_code == 409
    assert client.get(f"/users/{second}").json()["email"] == "two@medplus.in"


def test_user_with_customer_profile_cannot_be_deleted(client, make_customer):
    user_id, _ = make_customer()

    resp = client.delete(f"/users/{user_id}")

    assert resp.status_code == 500
    assert resp.json()["message"] == "User is linked to existing customers"
    assert client.get(f"/users/{user_id}").status_code == 200


# --------------------------------------------------------------- customers

def test_customer_crud(client):
    user_id = _create_user(client, email="walkin@medplus.in", role="Customer", full_name="Walk In").json()["id"]

    resp = client.post("/customers", json={"userId": user_id, "address": "5 Park Street", "phoneNumber": "9000000001"})
    assert resp.status_code == 201
    customer_id = resp.json()["id"]
    assert client.get("/customers/dropdown").json() == [{"value": customer_id, "label": "Walk In"}]

    update = client.put(
        f"/customers/{customer_id}",
        json={"userId": user_id, "address": "7 Lake Road", "phoneNumber": "9000000002"},
    )
    assert update.status_code == 204
    assert client.get(f"/customers/{customer_id}").json()["address"] == "7 Lake Road"

    assert client.delete(f"/customers/{customer_id}").status_code == 204
    assert client.get(f"/customers/{customer_id}").status_code == 404


def test_customer_needs_existing_user(client):
    resp = client.post("/customers", json={"userId": 99, "address": "Nowhere", "phoneNumber": "9000000003"})

    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid UserId"


def test_customer_with_orders_cannot_be_deleted(client, make_customer, make_order):
    _, customer_id = make_customer()
    make_order(customer_id)

    resp = client.delete(f"/customers/{customer_id}")

    assert resp.status_code == 500
    assert "existing orders" in resp.json()["message"]


# ------------------------------------------------------------------ upload

def test_upload_image(client):
    user_id = _create_user(client).json()["id"]

    resp = client.post(f"/users/UploadImage/{user_id}", files={"file": ("avatar.PNG", PNG_BYTES, "image/png")})

    assert resp.status_code == 200
    image_url = resp.json()["imageUrl"]
    assert image_url.startswith("/media/user-images/")
    assert image_url.endswith(".png")
    assert client.get(f"/users/{user_id}").json()["imageUrl"] == image_url
    stored = Path(settings.MEDIA_ROOT) / "user-images" / image_url.rsplit("/", 1)[-1]
    assert stored.read_bytes() == PNG_BYTES
    assert client.get(image_url).content == PNG_BYTES


def test_new_upload_replaces_old_file(client):
    user_id = _create_user(client).json()["id"]
    first = client.post(f"/users/UploadImage/{user_id}", files={"file": ("a.jpg", b"first", "image/jpeg")}).json()
    second = client.post(f"/users/UploadImage/{user_id}", files={"file": ("b.gif", b"second", "image/gif")}).json()

    old = Path(settings.MEDIA_ROOT) / "user-images" / first["imageUrl"].rsplit("/", 1)[-1]
    assert not old.exists()
    assert client.get(f"/users/{user_id}").json()["imageUrl"] == second["imageUrl"]


def test_upload_rejects_bad_files(client):
    user_id = _create_user(client).json()["id"]

    wrong_type = client.post(f"/users/UploadImage/{user_id}", files={"file": ("notes.txt", b"hello", "text/plain")})
    empty = client.post(f"/users/UploadImage/{user_id}", files={"file": ("empty.png", b"", "image/png")})

    assert wrong_type.status_code == 400
    assert "Invalid file type" in wrong_type.json()["message"]
    assert empty.status_code == 400
    assert client.get(f"/users/{user_id}").json()["imageUrl"] is None


def test_upload_for_unknown_user(client):
    resp = client.post("/users/UploadImage/999", files={"file": ("avatar.png", PNG_BYTES, "image/png")})

    assert resp.status_code == 404


def test_failed_upload_leaves_no_file_behind(client, monkeypatch):
    user_id = _create_user(client).json()["id"]
    images = Path(settings.MEDIA_ROOT) / "user-images"
    images.mkdir(parents=True, exist_ok=True)
    before = set(images.iterdir())

    def broken_commit(db, uid, image_url):
        raise StorageConstraintError()

    monkeypatch.setattr(user_service, "set_image_url", broken_commit)
    resp = client.post(f"/users/UploadImage/{user_id}", files={"file": ("avatar.png", PNG_BYTES, "image/png")})

    assert resp.status_code == 500
    assert set(images.iterdir()) == before
    assert client.get(f"/users/{user_id}").json()["imageUrl"] is None
