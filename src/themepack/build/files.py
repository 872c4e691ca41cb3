"""
File operations for the build pipeline: glob expansion, copy, clean and zip.

Patterns are glob patterns relative to a working directory. A pattern
starting with '!' removes whatever it matches from the files collected by
the patterns before it, so order matters.
"""

import logging
import os
import posixpath
import shutil
import zipfile
from pathlib import Path
from typing import Iterable, List

logger = logging.getLogger(__name__)


def join_path(base: str, relative: str) -> str:
    """Join a relative asset path onto base.

    A leading '/' on the relative part (left behind when the theme-URI
    prefix is stripped) does not reset the join to the filesystem root.
    """
    return posixpath.normpath(posixpath.join(base, relative.lstrip('/')))


def expand(patterns: Iterable[str], cwd: Path) -> List[str]:
    """Expand patterns against cwd into sorted relative POSIX paths."""
    cwd = Path(cwd)
    matched = set()
    for pattern in patterns:
        exclude = pattern.startswith('!')
        if exclude:
            pattern = pattern[1:]
        hits = {p.relative_to(cwd).as_posix() for p in cwd.glob(pattern)}
        if exclude:
            matched -= hits
        else:
            matched |= hits
    return sorted(matched)


def copy_files(patterns: Iterable[str], cwd: Path, dest: Path) -> List[Path]:
    """Copy every file matched under cwd into dest, keeping relative paths."""
    cwd, dest = Path(cwd), Path(dest)
    copied = []
    for relative in expand(patterns, cwd):
        source = cwd / relative
        if source.is_dir():
            continue
        target = dest / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, target)
        copied.append(target)
    logger.debug(f"Copied {len(copied)} files from {cwd} to {dest}")
    return copied


def clean(patterns: Iterable[str], cwd: Path) -> List[Path]:
    """Delete every file or directory matched under cwd."""
    cwd = Path(cwd)
    removed = []
    # Deepest first so a matched directory never disappears under a file
    for relative in sorted(expand(patterns, cwd), key=lambda p: p.count('/'), reverse=True):
        target = cwd / relative
        if target.is_dir():
            shutil.rmtree(target)
        elif target.exists():
            target.unlink()
        else:
            continue
        removed.append(target)
    logger.debug(f"Removed {len(removed)} paths under {cwd}")
    return removed


def remove_tree(path: Path) -> bool:
    """Remove a directory tree if it exists."""
    path = Path(path)
    if not path.exists():
        return False
    shutil.rmtree(path)
    return True


def zip_directory(source: Path, archive: Path) -> List[str]:
    """Zip source into archive; entries are prefixed with source's own name."""
    source, archive = Path(source), Path(archive)
    archive.parent.mkdir(parents=True, exist_ok=True)
    if archive.exists():
        archive.unlink()

    names = []
    with zipfile.ZipFile(archive, 'w', compression=zipfile.ZIP_DEFLATED) as z:
        for root, dirs, files in os.walk(source):
            dirs.sort()
            for name in sorted(files):
                path = Path(root) / name
                arcname = path.relative_to(source.parent).as_posix()
                z.write(path, arcname=arcname)
                names.append(arcname)
    logger.debug(f"Wrote {len(names)} entries to {archive}")
    return names
