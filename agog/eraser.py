"""Recursive removal of a directory tree."""

import logging
import os
import stat
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


@dataclass
class EraseFailure:
    """A single entry that could not be inspected or removed."""

    path: Path
    operation: str  # "scandir", "stat", "unlink" or "rmdir"
    error: OSError

    def __str__(self):
        reason = self.error.strerror or str(self.error)
        return f"could not {self.operation} {self.path}: {reason}"


@dataclass
class EraseResult:
    path: Path
    removed: List[Path] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)
    failures: List[EraseFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class EraseError(Exception):
    """Raised in strict mode on the first entry that cannot be removed."""

    def __init__(self, failure: EraseFailure, result: EraseResult):
        super().__init__(str(failure))
        self.failure = failure
        self.result = result


def erase(path, *, strict: bool = False, skip_hidden: bool = True) -> EraseResult:
    """Delete ``path`` and everything beneath it, depth first.

    A path that does not exist or is not a directory is left alone and yields an
    empty result. Symlinks are removed, never followed.

    Args:
        path: Directory to remove.
        strict: Raise :class:`EraseError` on the first failure instead of
            recording it and carrying on.
        skip_hidden: Leave entries whose name starts with ``.`` in place. The
            directory itself then cannot be removed and the final ``rmdir``
            shows up as a failure.

    Returns:
        An :class:`EraseResult` listing what was removed, skipped and failed.
    """
    result = EraseResult(path=Path(path))
    if result.path.is_symlink():
        _unlink(result.path, result, strict)
        return result
    _erase_tree(result.path, result, strict, skip_hidden)
    return result


def _record(result: EraseResult, strict: bool, path: Path, operation: str, error):
    failure = EraseFailure(path=path, operation=operation, error=error)
    logger.warning("Could not %s %s: %s", operation, path, error)
    result.failures.append(failure)
    if strict:
        raise EraseError(failure, result)


def _unlink(path: Path, result: EraseResult, strict: bool):
    try:
        os.unlink(path)
    except FileNotFoundError:
        return
    except OSError as e:
        _record(result, strict, path, "unlink", e)
        return
    logger.debug("Removed file %s", path)
    result.removed.append(path)


def _list_names(path: Path, result: EraseResult, strict: bool):
    """Names in ``path``, or None when it cannot be walked."""
    try:
        with os.scandir(path) as it:
            return [entry.name for entry in it]
    except (FileNotFoundError, NotADirectoryError):
        return None
    except OSError as e:
        _record(result, strict, path, "scandir", e)
        return None


def _rmdir(path: Path, result: EraseResult, strict: bool):
    try:
        os.rmdir(path)
    except FileNotFoundError:
        return
    except OSError as e:
        _record(result, strict, path, "rmdir", e)
        return
    logger.debug("Removed directory %s", path)
    result.removed.append(path)


def _erase_tree(root: Path, result: EraseResult, strict: bool, skip_hidden: bool):
    names = _list_names(root, result, strict)
    if names is None:
        return

    # Directories still being emptied, deepest last
    stack = [(root, iter(names))]
    while stack:
        path, remaining = stack[-1]
        for name in remaining:
            child = path / name
            if skip_hidden and name.startswith("."):
                logger.debug("Skipping hidden entry %s", child)
                result.skipped.append(child)
                continue

            try:
                mode = os.lstat(child).st_mode
            except FileNotFoundError:
                continue
            except OSError as e:
                _record(result, strict, child, "stat", e)
                continue

            if stat.S_ISDIR(mode):
                child_names = _list_names(child, result, strict)
                if child_names is not None:
                    stack.append((child, iter(child_names)))
                    break
            else:
                _unlink(child, result, strict)
        else:
            stack.pop()
            _rmdir(path, result, strict)
