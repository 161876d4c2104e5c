"""Module root discovery."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

from modlicense.constants import DEFAULT_DESCRIPTOR
from modlicense.exceptions import NoModulesFoundError, TraversalError
from modlicense.logging import get_logger

log = get_logger(__name__)


def find_module_roots(
    root: Union[str, Path],
    descriptor: str = DEFAULT_DESCRIPTOR,
) -> list[Path]:
    """Find every directory under root that directly contains a descriptor file.

    The walk is a full recursive traversal that does not follow symlinked
    directories. Siblings are visited in sorted order, so the result is
    deterministic for a given tree.

    Args:
        root: Directory to search. Included in the result when it carries
            the descriptor itself.
        descriptor: File name marking a module root (e.g. ``go.mod``).

    Returns:
        Module root directories in traversal order; empty if none exist.

    Raises:
        TraversalError: If root is not a directory or any directory below
            it cannot be read. The walk is aborted, not skipped over.
    """
    root_path = Path(root)
    if not root_path.is_dir():
        raise TraversalError(f"Cannot read directory '{root_path}': not a directory")

    def _abort(error: OSError) -> None:
        raise TraversalError(
            f"Cannot read directory '{error.filename}': {error.strerror or error}"
        ) from error

    module_roots: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root_path, onerror=_abort):
        dirnames.sort()
        if descriptor in filenames:
            module_roots.append(Path(dirpath))

    log.debug("discovered module roots", root=str(root_path), count=len(module_roots))
    return module_roots


def require_module_roots(
    root: Union[str, Path],
    descriptor: str = DEFAULT_DESCRIPTOR,
) -> list[Path]:
    """Find module roots, failing when there are none.

    Raises:
        TraversalError: If the tree cannot be walked.
        NoModulesFoundError: If no directory carries the descriptor.
    """
    module_roots = find_module_roots(root, descriptor)
    if not module_roots:
        raise NoModulesFoundError(f"No directories with {descriptor} found in {root}")
    return module_roots
