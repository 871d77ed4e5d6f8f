"""topicgen error types and utilities."""

from __future__ import annotations

import os
import stat
import tempfile
from dataclasses import dataclass
from pathlib import Path


# Read once at import; os.umask can only be queried by setting it
_UMASK = os.umask(0)
os.umask(_UMASK)


def _target_mode(path: Path) -> int:
    """Mode for the replacement file: keep the existing one, else 0666 minus umask."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        return 0o666 & ~_UMASK


def atomic_write(path: Path, content: str) -> None:
    """Write content to a file atomically using temp file + rename.

    Writes UTF-8 (no BOM) to a temporary file in the same directory, fsyncs
    it, then atomically replaces the target path. An existing target keeps
    its permission bits and a new one gets the umask default. On any failure
    the temp file is removed and the target is left as it was.
    """
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(content.encode("utf-8"))
            fh.flush()
            os.fchmod(fh.fileno(), _target_mode(path))
            os.fsync(fh.fileno())
        os.replace(tmp, str(path))
    except BaseException:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


class TopicgenError(Exception):
    """Base exception for topicgen."""

    pass


@dataclass
class ValidationIssue:
    """A single invariant violation on one record."""

    label: str  # "56-rate-limit-bypass-attacks", or "#3" when the record has no usable label
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.label}: {self.field}: {self.message}"


class ValidationError(TopicgenError):
    """A topic record (or the registry as a whole) breaks an invariant."""

    def __init__(self, issues: list[ValidationIssue] | ValidationIssue):
        if isinstance(issues, ValidationIssue):
            issues = [issues]
        self.issues = list(issues)
        if len(self.issues) == 1:
            message = str(self.issues[0])
        else:
            message = f"{len(self.issues)} validation issues: " + "; ".join(str(i) for i in self.issues)
        super().__init__(message)


class RenderError(TopicgenError):
    """Template substitution left a placeholder unresolved or hit an unknown one."""

    pass


class FilesystemError(TopicgenError):
    """Directory creation or file write failed."""

    def __init__(self, path: Path | str, cause: OSError):
        self.path = Path(path)
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(f"cannot write {self.path}: {reason}")
