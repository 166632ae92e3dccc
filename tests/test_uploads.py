"""Tests for upload validation and download resolution."""

import pytest

from lexparse.core.errors import UploadRejected
from lexparse.uploads import UploadValidator, check_document_id, resolve_download


@pytest.fixture
def validator(tmp_path):
    return UploadValidator(
        upload_dir=tmp_path / "uploads",
        allowed_extensions=[".txt", ".docx"],
        max_bytes=1024,
    )


class TestSanitizeFilename:
    def test_plain_name(self, validator):
        assert validator.sanitize_filename("code.txt") == "code.txt"

    def test_strips_directories(self, validator):
        assert validator.sanitize_filename("/tmp/docs/code.txt") == "code.txt"
        assert validator.sanitize_filename("C:\\docs\\code.DOCX") == "code.DOCX"

    @pytest.mark.parametrize("name", ["../etc/passwd.txt", "..\\secret.txt", "a/../../b.txt"])
    def test_rejects_traversal(self, validator, name):
        with pytest.raises(UploadRejected, match="traversal"):
            validator.sanitize_filename(name)

    def test_rejects_null_byte(self, validator):
        with pytest.raises(UploadRejected, match="null byte"):
            validator.sanitize_filename("code.txt\x00.exe")

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_rejects_empty(self, validator, name):
        with pytest.raises(UploadRejected) as exc:
            validator.sanitize_filename(name)
        assert exc.value.status_code == 400

    def test_rejects_extension(self, validator):
        with pytest.raises(UploadRejected) as exc:
            validator.sanitize_filename("code.pdf")
        assert exc.value.status_code == 415

    def test_removes_control_and_unsafe_chars(self, validator):
        assert validator.sanitize_filename("co\x07de<1>.txt") == "code_1_.txt"


class TestSave:
    def test_save_writes_file(self, validator):
        path = validator.save(b"hello", "code.txt")
        assert path.parent == validator.upload_dir
        assert path.name.endswith("_code.txt")
        assert path.read_bytes() == b"hello"

    def test_same_name_does_not_overwrite(self, validator):
        first = validator.save(b"a", "code.txt")
        second = validator.save(b"b", "code.txt")
        assert first != second

    def test_too_large(self, validator):
        with pytest.raises(UploadRejected) as exc:
            validator.save(b"x" * 2048, "code.txt")
        assert exc.value.status_code == 413
        assert not validator.upload_dir.exists()


class TestResolveDownload:
    def test_resolves_nested_file(self, tmp_path):
        (tmp_path / "run_csv").mkdir()
        target = tmp_path / "run_csv" / "parts.csv"
        target.write_text("x")
        assert resolve_download("run_csv/parts.csv", tmp_path) == target.resolve()

    @pytest.mark.parametrize("name", ["../outside.txt", "/etc/passwd"])
    def test_rejects_escape(self, tmp_path, name):
        with pytest.raises(UploadRejected) as exc:
            resolve_download(name, tmp_path / "out")
        assert exc.value.status_code == 400

    def test_missing_file(self, tmp_path):
        with pytest.raises(UploadRejected) as exc:
            resolve_download("nope.sql", tmp_path)
        assert exc.value.status_code == 404

    def test_required(self, tmp_path):
        with pytest.raises(UploadRejected, match="required"):
            resolve_download(None, tmp_path)


class TestCheckDocumentId:
    def test_plain_id(self):
        assert check_document_id(" gk_2024 ") == "gk_2024"

    @pytest.mark.parametrize("value", ["../escaped/pwn", "a/b", "a\\b", ".hidden", ".."])
    def test_rejects_path_components(self, value):
        with pytest.raises(UploadRejected, match="path components") as exc:
            check_document_id(value)
        assert exc.value.status_code == 400

    @pytest.mark.parametrize("value", ["bad\x00id", "a|b", "a:b"])
    def test_rejects_unsafe_characters(self, value):
        with pytest.raises(UploadRejected, match="unsupported characters"):
            check_document_id(value)

    def test_rejects_empty(self):
        with pytest.raises(UploadRejected, match="required"):
            check_document_id("   ")
