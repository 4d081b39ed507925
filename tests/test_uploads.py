"""Tests for picture uploads."""


def test_upload_jpeg(client, image_root, editor_headers):
    resp = client.post(
        "/api/upload_picture",
        files={"picture": ("headshot.jpg", b"\xff\xd8\xffjpeg-data", "image/jpeg")},
        headers=editor_headers,
    )
    assert resp.status_code == 201
    location = resp.headers["location"]
    assert location.startswith("/image/")
    assert location.endswith(".jpeg")

    stored = image_root / location[len("/image/"):]
    assert stored.read_bytes() == b"\xff\xd8\xffjpeg-data"


def test_upload_names_are_unique(client, image_root, editor_headers):
    files = {"picture": ("a.jpg", b"same", "image/jpeg")}
    first = client.post("/api/upload_picture", files=files, headers=editor_headers)
    second = client.post("/api/upload_picture", files=files, headers=editor_headers)
    assert first.headers["location"] != second.headers["location"]


def test_upload_rejects_other_types(client, image_root, editor_headers):
    resp = client.post(
        "/api/upload_picture",
        files={"picture": ("diagram.png", b"\x89PNG", "image/png")},
        headers=editor_headers,
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Required image type is JPEG"


def test_upload_requires_login(client, image_root):
    resp = client.post("/api/upload_picture", files={"picture": ("a.jpg", b"x", "image/jpeg")})
    assert resp.status_code == 401
