"""Tests for form data parsing, flattening, and multipart."""

import pytest

from connectz.errors import ConfigurationError
from connectz.forms.data import FormData, UploadFile, collect_values, parse_form_data

# ---------------------------------------------------------------------------
# FormData unit tests
# ---------------------------------------------------------------------------


class TestFormData:
    def test_getitem(self) -> None:
        form = FormData([("name", "alice")])
        assert form["name"] == "alice"

    def test_getitem_returns_first(self) -> None:
        form = FormData([("color", "red"), ("color", "blue")])
        assert form["color"] == "red"

    def test_getitem_missing_raises(self) -> None:
        form = FormData()
        with pytest.raises(KeyError):
            form["missing"]

    def test_get_with_default(self) -> None:
        form = FormData()
        assert form.get("missing") is None
        assert form.get("missing", "fallback") == "fallback"

    def test_get_list(self) -> None:
        form = FormData([("genre", "jazz"), ("genre", "funk"), ("genre", "soul")])
        assert form.get_list("genre") == ["jazz", "funk", "soul"]

    def test_get_list_missing(self) -> None:
        assert FormData().get_list("missing") == []

    def test_contains(self) -> None:
        form = FormData([("name", "alice")])
        assert "name" in form
        assert "age" not in form

    def test_len_counts_names(self) -> None:
        form = FormData([("a", "1"), ("b", "2"), ("a", "3")])
        assert len(form) == 2

    def test_repr(self) -> None:
        form = FormData([("name", "alice")])
        assert "FormData" in repr(form)
        assert "alice" in repr(form)

    def test_files_empty_by_default(self) -> None:
        assert len(FormData([("x", "1")]).files) == 0

    def test_flatten_includes_files(self) -> None:
        avatar = UploadFile.from_bytes("me.png", b"png", "image/png")
        form = FormData([("tag", "a"), ("tag", "b")], files={"avatar": avatar})
        assert form.flatten() == {"tag": ["a", "b"], "avatar": avatar}


class TestUploadFile:
    def test_from_bytes(self) -> None:
        upload = UploadFile.from_bytes("beat.mp3", b"ID3", "audio/mpeg")
        assert upload.size == 3
        assert upload.read() == b"ID3"

    def test_save(self, tmp_path) -> None:
        upload = UploadFile.from_bytes("note.txt", b"hello")
        target = tmp_path / "note.txt"
        upload.save(target)
        assert target.read_bytes() == b"hello"

    def test_repr(self) -> None:
        upload = UploadFile.from_bytes("note.txt", b"hello", "text/plain")
        assert repr(upload) == "UploadFile('note.txt', 'text/plain', 5 bytes)"


class TestCollectValues:
    def test_single_values_stay_scalar(self) -> None:
        assert collect_values([("city", "LA"), ("state", "CA")]) == {
            "city": "LA",
            "state": "CA",
        }

    def test_repeated_names_become_lists(self) -> None:
        pairs = [("genre", "jazz"), ("city", "LA"), ("genre", "funk"), ("genre", "soul")]
        assert collect_values(pairs) == {"genre": ["jazz", "funk", "soul"], "city": "LA"}

    def test_empty(self) -> None:
        assert collect_values([]) == {}


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestParseUrlEncoded:
    def test_basic(self) -> None:
        form = parse_form_data(b"name=alice&age=30", "application/x-www-form-urlencoded")
        assert form["name"] == "alice"
        assert form["age"] == "30"

    def test_multiple_values(self) -> None:
        form = parse_form_data(b"tag=a&tag=b", "application/x-www-form-urlencoded")
        assert form.get_list("tag") == ["a", "b"]

    def test_blank_values_kept(self) -> None:
        form = parse_form_data(b"bio=&name=x", "application/x-www-form-urlencoded")
        assert form["bio"] == ""

    def test_special_chars(self) -> None:
        form = parse_form_data(
            b"msg=hello+world&q=a%26b",
            "application/x-www-form-urlencoded; charset=utf-8",
        )
        assert form["msg"] == "hello world"
        assert form["q"] == "a&b"


class TestParseMultipart:
    BODY = (
        b"--XyZ\r\n"
        b'Content-Disposition: form-data; name="title"\r\n'
        b"\r\n"
        b"Demo tape\r\n"
        b"--XyZ\r\n"
        b'Content-Disposition: form-data; name="avatar"; filename="cover.png"\r\n'
        b"Content-Type: image/png\r\n"
        b"\r\n"
        b"\x89PNG\r\n"
        b"--XyZ--\r\n"
    )

    def test_fields_and_files(self) -> None:
        form = parse_form_data(self.BODY, "multipart/form-data; boundary=XyZ")
        assert form["title"] == "Demo tape"
        avatar = form.files["avatar"]
        assert avatar.filename == "cover.png"
        assert avatar.content_type == "image/png"
        assert avatar.read() == b"\x89PNG"
        assert avatar.size == 4

    def test_missing_boundary(self) -> None:
        with pytest.raises(ConfigurationError, match="boundary"):
            parse_form_data(self.BODY, "multipart/form-data")


class TestParseUnsupported:
    def test_unsupported_content_type(self) -> None:
        with pytest.raises(ValueError, match="Unsupported"):
            parse_form_data(b"{}", "application/json")
