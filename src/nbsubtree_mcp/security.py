"""Security utilities: notebook path validation and base directory containment."""

import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

NOTEBOOK_EXTENSIONS = ('.ipynb',)

ROOT_ENV = 'NBSUBTREE_ROOT'
READ_ONLY_ENV = 'NBSUBTREE_READ_ONLY'


def is_notebook_filename(filename: str) -> bool:
    """Check if a filename has a notebook extension."""
    return Path(filename).suffix.lower() in NOTEBOOK_EXTENSIONS


def validate_path_traversal(resolved_path: Path, base_path: Path) -> bool:
    """Check that a resolved path is within the base directory (no traversal/symlink escape)."""
    try:
        resolved_path.relative_to(base_path)
        return True
    except ValueError:
        return False


def configured_root() -> Optional[Path]:
    """Base directory notebooks must live in, if one is configured."""
    root = os.environ.get(ROOT_ENV, '').strip()
    if not root:
        return None
    return Path(root).expanduser().resolve()


def is_read_only() -> bool:
    return os.environ.get(READ_ONLY_ENV, '').lower() in ('true', '1', 'yes')


def resolve_notebook_path(path: str) -> Path:
    """
    Resolve and validate a notebook path.

    Raises:
        ValueError: if the path is not a notebook, escapes the configured
            root, or does not exist
    """
    if not is_notebook_filename(path):
        raise ValueError(f"Not a notebook file: {path}")

    resolved = Path(path).expanduser().resolve()
    root = configured_root()
    if root is not None and not validate_path_traversal(resolved, root):
        logger.warning("Notebook path escapes %s, rejecting: %s", root, path)
        raise ValueError(f"Path is outside {ROOT_ENV}: {path}")

    if not resolved.is_file():
        raise ValueError(f"Notebook does not exist: {path}")
    return resolved
