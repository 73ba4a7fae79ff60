"""File discovery and atomic writes for documents and their translations."""

import logging
import os
import stat
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Union


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TranslationFile:
    """A translated copy of a document inside a locale subdirectory."""
    locale: str
    path: Path


def discover_translations(document_path: Union[str, Path]) -> List[TranslationFile]:
    """
    Find translated copies of a document.

    Translations live in the immediate subdirectories of the document's
    directory, under the same file name. Subdirectories without such a file
    are skipped silently.

    Args:
        document_path: Path of the source document.

    Returns:
        Translations sorted by locale name.
    """
    path = Path(document_path)
    found = []
    for entry in sorted(path.parent.iterdir()):
        if not entry.is_dir():
            continue
        candidate = entry / path.name
        if candidate.is_file():
            found.append(TranslationFile(locale=entry.name, path=candidate))
        else:
            logger.debug(f"no translation in {entry}")
    return found


def atomic_write_bytes(path: Union[str, Path], data: bytes) -> Path:
    """
    Replace ``path`` with ``data`` via a temporary file and ``os.replace``.

    Readers see either the old or the new contents, never a partial write.
    The file mode of an existing target is preserved.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    mode = None
    if path.exists():
        mode = stat.S_IMODE(path.stat().st_mode)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        if mode is not None:
            os.chmod(tmp_name, mode)
        else:
            os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.debug(f"wrote {len(data)} bytes to {path}")
    return path
