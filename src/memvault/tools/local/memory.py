"""Memory store: file commands inside the memory root sandbox."""

from __future__ import annotations

import logging
import os
import shutil
import stat
import tempfile
from pathlib import Path

from memvault.core.commands import Command, MemoryArgs
from memvault.core.errors import (
    ConflictError,
    Err,
    ErrorKind,
    MemoryToolError,
    MissingArgumentError,
    NotFoundError,
    NotMatchedError,
    Ok,
    Outcome,
    ValidationError,
)
from memvault.core.paths import VirtualPathMapper

logger = logging.getLogger(__name__)

EMPTY_LISTING = "No files found."


def _require(value: object, name: str, command: Command) -> None:
    if value is None or value == "":
        raise MissingArgumentError(f"{name} is required for {command.value} command")


def _read_text(path: Path) -> str:
    with path.open("r", encoding="utf-8", newline="") as handle:
        return handle.read()


def _atomic_write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.is_dir():
        raise IsADirectoryError(f"Is a directory: {path.name}")
    fd, tmp_path = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent)
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        # mkstemp creates 0600; keep the mode of the file being replaced.
        if path.exists():
            os.chmod(tmp_path, stat.S_IMODE(path.stat().st_mode))
        os.replace(tmp_path, path)
    except Exception:
        Path(tmp_path).unlink(missing_ok=True)
        raise


class MemoryStore:
    """Runs memory commands against a single storage root.

    All state lives on disk, so one instance can serve any number of calls.
    """

    def __init__(self, root: Path) -> None:
        self.paths = VirtualPathMapper(root)

    @property
    def root(self) -> Path:
        return self.paths.root

    def ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def execute(self, args: MemoryArgs) -> Outcome:
        try:
            self.ensure_root()
            message = self._dispatch(args)
        except MemoryToolError as exc:
            logger.warning("memory %s failed: %s", args.command.value, exc.message)
            return Err(exc.kind, exc.message)
        except OSError as exc:
            logger.warning("memory %s I/O failure: %s", args.command.value, exc)
            return Err(ErrorKind.IO_FAILURE, _describe_os_error(exc))
        return Ok(message)

    def _dispatch(self, args: MemoryArgs) -> str:
        command = args.command
        if command is Command.VIEW:
            return self.view(args.path, args.view_range)
        if command is Command.CREATE:
            return self.create(args.path, args.file_text)
        if command is Command.STR_REPLACE:
            return self.str_replace(args.path, args.old_str, args.new_str)
        if command is Command.INSERT:
            return self.insert(args.path, args.insert_line, args.insert_text)
        if command is Command.DELETE:
            return self.delete(args.path)
        if command is Command.RENAME:
            return self.rename(args.old_path, args.new_path, args.overwrite)
        raise ValidationError(f"Unsupported command: {command}")

    def view(
        self, path: str | None, view_range: tuple[int, int] | None = None
    ) -> str:
        _require(path, "path", Command.VIEW)
        target = self.paths.to_real(path)
        if not target.exists():
            raise NotFoundError(f"Path does not exist: {path}")
        if target.is_dir():
            return self.list_directory(target)

        content = _read_text(target)
        if view_range is None:
            return content
        start, end = view_range
        if start < 1 or end < start:
            raise ValidationError(
                f"view_range must satisfy 1 <= start <= end, got [{start}, {end}]"
            )
        return "\n".join(content.split("\n")[start - 1 : end])

    def list_directory(self, directory: Path) -> str:
        entries: list[str] = []
        self._walk(directory, entries)
        return "\n".join(entries) if entries else EMPTY_LISTING

    def _walk(self, directory: Path, entries: list[str]) -> None:
        with os.scandir(directory) as items:
            children = sorted(items, key=lambda item: item.name)
        for item in children:
            full_path = directory / item.name
            suffix = "/" if item.is_dir() else ""
            entries.append(self.paths.to_virtual(full_path) + suffix)
            # Linked directories are marked but never descended into.
            if item.is_dir(follow_symlinks=False):
                self._walk(full_path, entries)

    def create(self, path: str | None, file_text: str | None = None) -> str:
        _require(path, "path", Command.CREATE)
        target = self.paths.to_real(path)
        _atomic_write_text(target, file_text or "")
        logger.info("created %s", path)
        return f"Created: {path}"

    def str_replace(
        self, path: str | None, old_str: str | None, new_str: str | None
    ) -> str:
        _require(path, "path", Command.STR_REPLACE)
        _require(old_str, "old_str", Command.STR_REPLACE)
        if new_str is None:
            raise MissingArgumentError("new_str is required for str_replace command")
        target = self.paths.to_real(path)
        if not target.is_file():
            raise NotFoundError(f"File does not exist: {path}")

        content = _read_text(target)
        if old_str not in content:
            raise NotMatchedError(f'String not found in file: "{old_str}"')
        _atomic_write_text(target, content.replace(old_str, new_str, 1))
        logger.info("replaced text in %s", path)
        return f"Replaced in {path}"

    def insert(
        self, path: str | None, insert_line: int | None, insert_text: str | None
    ) -> str:
        _require(path, "path", Command.INSERT)
        if insert_line is None:
            raise MissingArgumentError("insert_line is required for insert command")
        if insert_text is None:
            raise MissingArgumentError("insert_text is required for insert command")
        if isinstance(insert_line, bool) or not isinstance(insert_line, int):
            raise ValidationError(f"insert_line must be an integer: {insert_line!r}")
        if insert_line < 1:
            raise ValidationError(f"insert_line must be >= 1, got {insert_line}")
        target = self.paths.to_real(path)
        if not target.is_file():
            raise NotFoundError(f"File does not exist: {path}")

        lines = _read_text(target).split("\n")
        # Past the end appends, matching list.insert.
        lines.insert(insert_line - 1, insert_text)
        _atomic_write_text(target, "\n".join(lines))
        logger.info("inserted at line %d in %s", insert_line, path)
        return f"Inserted at line {insert_line} in {path}"

    def delete(self, path: str | None) -> str:
        _require(path, "path", Command.DELETE)
        target = self.paths.to_entry(path)
        if self.paths.is_root(target):
            raise ValidationError("Cannot delete the memory root")
        if not _lexists(target):
            raise NotFoundError(f"Path does not exist: {path}")

        is_dir = target.is_dir() and not target.is_symlink()
        if is_dir:
            shutil.rmtree(target)
        else:
            target.unlink()
        kind = "directory" if is_dir else "file"
        logger.info("deleted %s %s", kind, path)
        return f"Deleted {kind}: {path}"

    def rename(
        self, old_path: str | None, new_path: str | None, overwrite: bool = False
    ) -> str:
        _require(old_path, "old_path", Command.RENAME)
        _require(new_path, "new_path", Command.RENAME)
        source = self.paths.to_entry(old_path)
        destination = self.paths.to_entry(new_path)
        if self.paths.is_root(source) or self.paths.is_root(destination):
            raise ValidationError("Cannot rename the memory root")
        if not _lexists(source):
            raise NotFoundError(f"Source path does not exist: {old_path}")
        if _lexists(destination) and not overwrite:
            raise ConflictError(f"Destination already exists: {new_path}")

        destination.parent.mkdir(parents=True, exist_ok=True)
        os.replace(source, destination)
        logger.info("renamed %s to %s", old_path, new_path)
        return f"Renamed: {old_path} → {new_path}"


def _lexists(path: Path) -> bool:
    return path.exists() or path.is_symlink()


def _describe_os_error(exc: OSError) -> str:
    reason = exc.strerror or str(exc)
    return f"Filesystem operation failed: {reason}"
