"""Validation and storage of uploaded documents.

Uploaded filenames come straight from the client. They are reduced to a
bare name, checked for traversal and control characters, and restricted to
the extensions a loader can decode before anything touches the disk.
"""

from __future__ import annotations

import logging
import re
import uuid
from pathlib import Path, PurePosixPath, PureWindowsPath

from lexparse.core.errors import UploadRejected

logger = logging.getLogger(__name__)

# Characters that could be used for path traversal
_TRAVERSAL_PATTERN = re.compile(r"(\.\.[\\/]|[\\/]\.\.)")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_UNSAFE_CHARS = re.compile(r'[<>:"|?*]')


def _is_subpath(child: Path, parent: Path) -> bool:
    """Return True when *child* is located under *parent*."""
    try:
        child.resolve().relative_to(parent.resolve())
        return True
    except ValueError:
        return False


class UploadValidator:
    """Validate and persist uploads for one deployment.

    Args:
        upload_dir: Directory uploads are written to.
        allowed_extensions: Accepted suffixes, lower case with dot.
        max_bytes: Maximum accepted upload size.
    """

    def __init__(
        self,
        upload_dir: Path,
        allowed_extensions: list[str] | tuple[str, ...],
        max_bytes: int,
    ) -> None:
        self.upload_dir = upload_dir
        self.allowed_extensions = tuple(e.lower() for e in allowed_extensions)
        self.max_bytes = max_bytes

    def sanitize_filename(self, filename: str | None) -> str:
        """Reduce a client-supplied filename to a safe bare name.

        Raises:
            UploadRejected: On empty names, traversal attempts, null bytes
                or disallowed extensions.
        """
        if not filename or not filename.strip():
            raise UploadRejected("No file name provided.")
        if "\x00" in filename:
            raise UploadRejected("File name contains a null byte.")
        if _TRAVERSAL_PATTERN.search(filename):
            raise UploadRejected("File name contains path traversal sequences.")

        # strip any client-side directory, posix or windows style
        name = PureWindowsPath(PurePosixPath(filename).name).name
        name = _CONTROL_CHARS.sub("", name)
        name = _UNSAFE_CHARS.sub("_", name).strip().lstrip(".")
        if not name:
            raise UploadRejected("File name is empty after sanitizing.")

        suffix = Path(name).suffix.lower()
        if suffix not in self.allowed_extensions:
            allowed = ", ".join(self.allowed_extensions)
            raise UploadRejected(
                f"Unsupported file format: {suffix or 'none'}. Accepted types: {allowed}",
                status_code=415,
            )
        return name

    def check_size(self, size: int) -> None:
        """Raises UploadRejected (413) when *size* exceeds the limit."""
        if size > self.max_bytes:
            raise UploadRejected(
                f"File too large: {size} bytes (limit {self.max_bytes}).",
                status_code=413,
            )

    def save(self, content: bytes, filename: str | None) -> Path:
        """Validate and write an upload, returning its path.

        Files are stored under a unique prefix so that concurrent uploads
        with the same name never overwrite each other.
        """
        name = self.sanitize_filename(filename)
        self.check_size(len(content))

        self.upload_dir.mkdir(parents=True, exist_ok=True)
        target = self.upload_dir / f"{uuid.uuid4().hex[:12]}_{name}"
        if not _is_subpath(target, self.upload_dir):
            raise UploadRejected("Upload path is outside the upload directory.")

        target.write_bytes(content)
        logger.info("Saved upload %s (%d bytes)", target.name, len(content))
        return target


def resolve_download(name: str | None, base_dir: Path) -> Path:
    """Resolve a requested download *name* to a file under *base_dir*.

    Raises:
        UploadRejected: 400 for empty names or paths escaping *base_dir*,
            404 when the file does not exist.
    """
    if not name or not name.strip():
        raise UploadRejected("File parameter is required.")
    if "\x00" in name:
        raise UploadRejected("File name contains a null byte.")

    candidate = base_dir / name
    if Path(name).is_absolute() or not _is_subpath(candidate, base_dir):
        raise UploadRejected("Requested file is outside the output directory.")
    if not candidate.is_file():
        raise UploadRejected(f"File not found: {name}", status_code=404)
    return candidate.resolve()


def check_document_id(document_id: str) -> str:
    """Validate a client-supplied document id used to name export files.

    The id must be a bare name: no directory separators, no traversal, no
    control or shell-unsafe characters.

    Raises:
        UploadRejected: 400 when *document_id* cannot name a file under
            the output directory.
    """
    value = document_id.strip()
    if not value:
        raise UploadRejected("Document id is required.")
    if "/" in value or "\\" in value or value.startswith("."):
        raise UploadRejected("Document id must not contain path components.")
    if _CONTROL_CHARS.search(value) or _UNSAFE_CHARS.search(value):
        raise UploadRejected("Document id contains unsupported characters.")
    return value
