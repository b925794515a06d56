import os
import tempfile
from pathlib import Path


class ArtifactWriteError(OSError):
    """An audit artifact (summary document or history record) could not be written."""


def atomic_write_text(path: Path, content: str, overwrite: bool = True) -> Path:
    """
    Write content next to its destination, then move it into place.
    Readers see either the previous file, the complete new file, or nothing.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ArtifactWriteError(f"Cannot create {path.parent}: {e}") from e

    if not overwrite and path.exists():
        raise ArtifactWriteError(f"Refusing to overwrite existing artifact {path}")

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except OSError as e:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise ArtifactWriteError(f"Cannot write {path}: {e}") from e
    return path
