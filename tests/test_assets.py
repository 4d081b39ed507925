"""Tests for ZIP export unpacking and image storage."""

import uuid
from datetime import datetime, timezone

import pytest

from conftest import make_zip
from richtext.assets import AssetLocation, content_name, extract_assets, store_image
from richtext.errors import FormatError

NOW = datetime(2024, 3, 15, tzinfo=timezone.utc)
PNG = b"\x89PNG\r\n\x1a\nfake-image-bytes"


def test_location_url():
    loc = AssetLocation(2024, 3, "abc123", "png")
    assert loc.url == "/image/2024/3/abc123.png"


def test_content_name_is_stable():
    assert content_name(PNG) == content_name(bytes(PNG))
    assert content_name(PNG) != content_name(PNG + b"!")


def test_content_name_matches_uuid3():
    # same name uuid3 gives for the equivalent UTF-8 string
    assert content_name(b"hello") == str(uuid.uuid3(uuid.NAMESPACE_URL, "hello"))
    assert content_name(b"") == str(uuid.uuid3(uuid.NAMESPACE_URL, ""))


def test_content_name_accepts_non_utf8_bytes():
    name = content_name(PNG)
    assert uuid.UUID(name).version == 3


def test_store_image_creates_directories(tmp_path):
    loc = store_image(tmp_path, PNG, "png", now=NOW)
    path = tmp_path / "2024" / "3" / f"{loc.name}.png"
    assert path.read_bytes() == PNG
    assert (loc.year, loc.month, loc.extension) == (2024, 3, "png")


def test_store_image_explicit_name(tmp_path):
    loc = store_image(tmp_path, b"jpeg", "jpeg", name="fixed", now=NOW)
    assert loc.url == "/image/2024/3/fixed.jpeg"
    assert (tmp_path / "2024" / "3" / "fixed.jpeg").exists()


def test_extract_html_and_images(tmp_path):
    data = make_zip({
        "doc.html": b"<p>Title</p>",
        "images/image1.png": PNG,
        "images/photo.jpg": b"jpg-bytes",
    })
    html, assets = extract_assets(data, tmp_path, now=NOW)

    assert html == "<p>Title</p>"
    assert set(assets) == {"images/image1.png", "images/photo.jpg"}
    png = assets["images/image1.png"]
    assert png == AssetLocation(2024, 3, content_name(PNG), "png")
    assert (tmp_path / png.relative_path).read_bytes() == PNG
    assert assets["images/photo.jpg"].extension == "jpg"


def test_missing_extension_defaults_to_png(tmp_path):
    data = make_zip({"doc.html": b"<p>x</p>", "images/noext": PNG})
    _, assets = extract_assets(data, tmp_path, now=NOW)
    assert assets["images/noext"].extension == "png"


def test_identical_images_share_one_file(tmp_path):
    data = make_zip({
        "doc.html": b"<p>x</p>",
        "images/a.png": PNG,
        "images/b.png": PNG,
    })
    _, assets = extract_assets(data, tmp_path, now=NOW)
    assert assets["images/a.png"] == assets["images/b.png"]
    assert len(list((tmp_path / "2024" / "3").iterdir())) == 1


def test_reimport_is_idempotent(tmp_path):
    data = make_zip({"doc.html": b"<p>x</p>", "images/a.png": PNG})
    _, first = extract_assets(data, tmp_path, now=NOW)
    _, second = extract_assets(data, tmp_path, now=NOW)

    assert first == second
    files = list((tmp_path / "2024" / "3").iterdir())
    assert len(files) == 1
    assert files[0].read_bytes() == PNG


def test_multiple_html_entries_concatenated_in_archive_order(tmp_path):
    data = make_zip({
        "b.html": b"<p>second-in-name</p>",
        "a.html": b"<p>first-in-name</p>",
    })
    html, _ = extract_assets(data, tmp_path, now=NOW)
    assert html == "<p>second-in-name</p><p>first-in-name</p>"


def test_other_entries_ignored(tmp_path):
    data = make_zip({"doc.html": b"<p>x</p>", "styles.css": b"p {}", "img/a.png": PNG})
    html, assets = extract_assets(data, tmp_path, now=NOW)
    assert html == "<p>x</p>"
    assert assets == {}
    assert not (tmp_path / "2024").exists()


def test_directory_entries_skipped(tmp_path):
    data = make_zip({"images/": b"", "doc.html": b"<p>x</p>"})
    _, assets = extract_assets(data, tmp_path, now=NOW)
    assert assets == {}


def test_corrupt_zip_is_format_error(tmp_path):
    with pytest.raises(FormatError):
        extract_assets(b"definitely not a zip", tmp_path)


def test_zip_without_html_is_format_error(tmp_path):
    with pytest.raises(FormatError):
        extract_assets(make_zip({"images/a.png": PNG}), tmp_path)
    assert list(tmp_path.iterdir()) == []


def test_bad_html_leaves_no_stored_images(tmp_path):
    data = make_zip({"images/a.png": PNG, "doc.html": b"\xff\xfe<p>"})
    with pytest.raises(FormatError):
        extract_assets(data, tmp_path)
    assert list(tmp_path.iterdir()) == []


def test_invalid_utf8_html_is_format_error(tmp_path):
    with pytest.raises(FormatError):
        extract_assets(make_zip({"doc.html": b"\xff\xfe<p>"}), tmp_path)


def test_write_failure_propagates(tmp_path):
    blocker = tmp_path / "root"
    blocker.write_text("not a directory")
    data = make_zip({"doc.html": b"<p>x</p>", "images/a.png": PNG})
    with pytest.raises(OSError):
        extract_assets(data, blocker, now=NOW)
