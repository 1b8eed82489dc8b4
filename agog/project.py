import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from agog.config import AgogConfig, ConfigManager
from agog.eraser import EraseResult, erase

logger = logging.getLogger(__name__)

# Owner-only read/write/execute
DIR_MODE = 0o700


class AgogError(Exception):
    """Base class for errors reported to the user."""


class UsageError(AgogError):
    """A command was invoked without a required argument."""


class InvalidProjectNameError(UsageError):
    pass


class ProjectExistsError(AgogError):
    pass


class ProjectNotFoundError(AgogError):
    pass


@dataclass
class AgogContext:
    config: AgogConfig
    console: Console
    config_manager: Optional[ConfigManager] = None

    @staticmethod
    def create(
        config: AgogConfig,
        console: Optional[Console] = None,
        config_manager: Optional[ConfigManager] = None,
    ) -> "AgogContext":
        return AgogContext(
            config=config,
            console=console or Console(),
            config_manager=config_manager,
        )

    @property
    def projects_dir(self) -> Path:
        return self.config.projects_dir


def setup(context: AgogContext) -> Path:
    """Create the agog home and projects directories if they are missing."""
    for directory in (context.config.home, context.projects_dir):
        if not os.path.isdir(directory):
            directory.mkdir(mode=DIR_MODE, parents=True)
            logger.info("Created %s", directory)
    return context.projects_dir


def project_path(context: AgogContext, name: str) -> Path:
    """Resolve a project name to its directory under the projects root."""
    if not name or name in (".", ".."):
        raise InvalidProjectNameError(f"Invalid project name {name!r}.")
    separators = {os.sep} | ({os.altsep} if os.altsep else set())
    if any(sep in name for sep in separators):
        raise InvalidProjectNameError(
            f"Invalid project name {name!r}: must not contain a path separator."
        )
    return context.projects_dir / name


def list_projects(context: AgogContext) -> List[str]:
    """List project names in directory order. Hidden entries are not projects."""
    try:
        with os.scandir(context.projects_dir) as it:
            return [entry.name for entry in it if not entry.name.startswith(".")]
    except FileNotFoundError:
        logger.debug("Projects directory %s does not exist", context.projects_dir)
        return []


def create_project(context: AgogContext, name: str) -> Path:
    """Create a new project directory.

    Raises:
        ProjectExistsError: If the project directory already exists. Nothing is
            written in that case.
    """
    path = project_path(context, name)
    if os.path.isdir(path):
        raise ProjectExistsError(f"Project {name} already exists.")

    setup(context)
    path.mkdir(mode=DIR_MODE)
    logger.info("Created project directory %s", path)
    return path


def destroy_project(
    context: AgogContext,
    name: str,
    strict: Optional[bool] = None,
    skip_hidden: Optional[bool] = None,
) -> EraseResult:
    """Recursively delete a project directory.

    ``strict`` and ``skip_hidden`` fall back to the ``erase`` section of the
    configuration when not given.

    Raises:
        ProjectNotFoundError: If the project is missing or cannot be inspected.
        EraseError: In strict mode, when part of the tree cannot be removed.
    """
    path = project_path(context, name)
    # Any stat failure, not just ENOENT, counts as a missing project
    if not os.path.isdir(path):
        raise ProjectNotFoundError(f"Project {name} does not exist.")

    if strict is None:
        strict = context.config.erase.strict
    if skip_hidden is None:
        skip_hidden = context.config.erase.skip_hidden

    result = erase(path, strict=strict, skip_hidden=skip_hidden)
    logger.info(
        "Erased %s: %d removed, %d skipped, %d failed",
        path,
        len(result.removed),
        len(result.skipped),
        len(result.failures),
    )
    return result
