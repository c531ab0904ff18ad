"""Tests for connectz.validation.files — upload size, type, and extension."""

from connectz.forms.data import UploadFile
from connectz.validation.files import (
    DEFAULT_FILE_RULES,
    MIB,
    FileRules,
    file_extension,
    validate_file,
)


def upload(name: str, content_type: str, size: int) -> UploadFile:
    return UploadFile(filename=name, content_type=content_type, size=size)


class TestDefaults:
    def test_limits(self) -> None:
        assert DEFAULT_FILE_RULES.max_size == 10 * MIB
        assert "image/png" in DEFAULT_FILE_RULES.allowed_types
        assert ".mp3" in DEFAULT_FILE_RULES.allowed_extensions

    def test_too_large(self) -> None:
        result = validate_file(upload("cover.png", "image/png", 12 * MIB))
        assert not result.valid
        assert "10MB" in result.message

    def test_type_not_allowed(self) -> None:
        result = validate_file(upload("stems.zip", "application/zip", 2 * MIB))
        assert result.message == "File type not allowed"

    def test_valid_image(self) -> None:
        assert validate_file(upload("cover.png", "image/png", 2 * MIB)).valid

    def test_exactly_at_limit(self) -> None:
        assert validate_file(upload("mix.wav", "audio/wav", 10 * MIB)).valid

    def test_extension_mismatch(self) -> None:
        result = validate_file(upload("cover.webp", "image/png", MIB))
        assert result.message == (
            "Only .jpg, .jpeg, .png, .gif, .mp3, .wav, .mp4 files are allowed"
        )

    def test_size_checked_before_type(self) -> None:
        result = validate_file(upload("stems.zip", "application/zip", 20 * MIB))
        assert "10MB" in result.message


class TestCustomRules:
    def test_smaller_limit(self) -> None:
        rules = FileRules(max_size=2 * MIB)
        result = validate_file(upload("a.png", "image/png", 3 * MIB), rules)
        assert result.message == "File size must not exceed 2MB"

    def test_type_check_disabled(self) -> None:
        rules = FileRules(allowed_types=None, allowed_extensions=(".zip",))
        assert validate_file(upload("stems.zip", "application/zip", MIB), rules).valid

    def test_extension_check_disabled(self) -> None:
        rules = FileRules(allowed_extensions=None)
        assert validate_file(upload("cover", "image/png", MIB), rules).valid


class TestFileExtension:
    def test_lowercased(self) -> None:
        assert file_extension("Track.MP3") == ".mp3"

    def test_last_dot_wins(self) -> None:
        assert file_extension("a.tar.gz") == ".gz"

    def test_no_dot(self) -> None:
        assert file_extension("README") == ".readme"
