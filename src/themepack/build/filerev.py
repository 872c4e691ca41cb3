"""
Content-hash file revisioning for cache-busting.

app.min.js becomes app.min.<hash>.js, where <hash> is the first `length`
hex digits of the digest of the file content.
"""

import hashlib
import logging
from pathlib import Path
from typing import Dict, Iterable

from .files import expand, join_path

logger = logging.getLogger(__name__)


def file_hash(path: Path, algorithm: str = 'md5', length: int = 8) -> str:
    digest = hashlib.new(algorithm)
    digest.update(Path(path).read_bytes())
    return digest.hexdigest()[:length]


def revved_name(path: Path, digest: str) -> str:
    path = Path(path)
    return f"{path.stem}.{digest}{path.suffix}"


def revision(patterns: Iterable[str], cwd: Path, algorithm: str = 'md5', length: int = 8) -> Dict[str, str]:
    """Rename every matched file in place; return {old path: new path}."""
    cwd = Path(cwd)
    summary = {}
    for relative in expand(patterns, cwd):
        source = cwd / relative
        if not source.is_file():
            continue
        target = source.with_name(revved_name(source, file_hash(source, algorithm, length)))
        source.rename(target)
        summary[join_path(cwd.as_posix(), relative)] = join_path(cwd.as_posix(), target.relative_to(cwd).as_posix())
        logger.debug(f"Revved {relative} -> {target.name}")
    return summary
