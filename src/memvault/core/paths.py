"""Virtual path translation with storage-root sandbox."""

from __future__ import annotations

import re
from pathlib import Path
from urllib.parse import unquote

from memvault.core.errors import ValidationError

VIRTUAL_ROOT = "/memories"

ENCODED_TRAVERSAL_RE = re.compile(r"%2e%2e|%2e%2f|%2e%5c", re.IGNORECASE)


def validate_virtual_path(virtual_path: str) -> str:
    """Check a virtual path without touching the filesystem.

    Returns the trimmed path. Raises ``ValidationError`` when the path is
    not rooted at ``/memories`` or carries a literal or percent-encoded
    parent-directory traversal.
    """
    path = virtual_path.strip()
    if path != VIRTUAL_ROOT and not path.startswith(f"{VIRTUAL_ROOT}/"):
        raise ValidationError(
            f"Path must start with {VIRTUAL_ROOT}: {virtual_path}"
        )
    if ".." in path:
        raise ValidationError(
            f"Path must not contain '..' to prevent directory traversal: {path}"
        )
    if ENCODED_TRAVERSAL_RE.search(path) or ".." in unquote(path):
        raise ValidationError(
            f"Path must not contain URL-encoded traversal sequences: {path}"
        )
    if "\x00" in path:
        raise ValidationError("Path must not contain NUL bytes")
    return path


def normalize_virtual_path(virtual_path: str) -> str:
    path = validate_virtual_path(virtual_path)
    parts = [part for part in path.split("/") if part not in {"", "."}]
    return "/" + "/".join(parts)


class VirtualPathMapper:
    def __init__(self, root: Path) -> None:
        self.root = root.expanduser().resolve()

    def to_real(self, virtual_path: str) -> Path:
        path = validate_virtual_path(virtual_path)
        relative = path[len(VIRTUAL_ROOT) :].lstrip("/")
        candidate = (self.root / relative).resolve()
        if candidate == self.root:
            return candidate
        if self.root not in candidate.parents:
            raise ValidationError(f"Path escapes memory root: {path}")
        return candidate

    def to_entry(self, virtual_path: str) -> Path:
        """Map to the entry itself, leaving a trailing symlink unresolved.

        The parent directory is resolved and must stay under the root; the
        last segment is joined as-is so callers act on a link, not its target.
        """
        path = validate_virtual_path(virtual_path)
        relative = path[len(VIRTUAL_ROOT) :].strip("/")
        if relative in {"", "."}:
            return self.root
        joined = Path(relative)
        parent = (self.root / joined.parent).resolve()
        if parent != self.root and self.root not in parent.parents:
            raise ValidationError(f"Path escapes memory root: {path}")
        if joined.name in {"", "."}:
            return parent
        return parent / joined.name

    def to_virtual(self, real_path: Path) -> str:
        try:
            relative = real_path.relative_to(self.root)
        except ValueError as exc:
            raise ValidationError("Path is outside memory root") from exc
        if relative == Path("."):
            return VIRTUAL_ROOT
        return f"{VIRTUAL_ROOT}/{relative.as_posix()}"

    def is_root(self, real_path: Path) -> bool:
        return real_path == self.root
