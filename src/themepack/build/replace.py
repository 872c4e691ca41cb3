"""
In-place text replacements on build files.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List

logger = logging.getLogger(__name__)


@dataclass
class Replacement:
    """Replace every match of pattern with the literal text `to`.

    `to` may refer to groups of pattern as {1}, {2}...
    """
    pattern: str
    to: str

    def apply(self, content: str) -> str:
        regex = re.compile(self.pattern)
        return regex.sub(lambda m: self.to.format(m.group(0), *m.groups()), content)


def version_replacements(version: str) -> List[Replacement]:
    """Stamp the version into the theme header (`Version: x.y.z`)."""
    return [Replacement(r'Version:(\s+)(.*)', 'Version:{1}' + version.replace('{', '{{').replace('}', '}}'))]


def placeholder_replacements(placeholder: str) -> List[Replacement]:
    """Put the theme-URI placeholder back in front of rewritten asset references.

    References that already carry the placeholder, and absolute URLs, are
    left alone.
    """
    skip = r'(?!{}|[a-z]+:|//)'.format(re.escape(placeholder))
    prefix = placeholder.replace('{', '{{').replace('}', '}}')
    return [
        Replacement(r'<script src="' + skip, '<script src="' + prefix + '/'),
        Replacement(r'<link rel="stylesheet" href="' + skip, '<link rel="stylesheet" href="' + prefix + '/'),
    ]


def replace_in_files(paths: Iterable[Path], replacements: List[Replacement]) -> List[Path]:
    """Apply replacements to each file, overwriting it; missing files are skipped."""
    changed = []
    for path in paths:
        path = Path(path)
        if not path.is_file():
            logger.warning(f"Replacement target {path} not found")
            continue
        content = path.read_text(encoding='utf-8')
        updated = content
        for replacement in replacements:
            updated = replacement.apply(updated)
        if updated != content:
            path.write_text(updated, encoding='utf-8')
            changed.append(path)
    return changed
