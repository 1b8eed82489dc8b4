#!/usr/bin/env python3
import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from agog import __version__
from agog.config import ConfigManager
from agog.eraser import EraseError
from agog.project import (
    AgogContext,
    ProjectExistsError,
    ProjectNotFoundError,
    UsageError,
    create_project,
    destroy_project,
    list_projects,
    setup as setup_dirs,
)
from agog.utils import CLITools

logger = logging.getLogger(__name__)

cli_tools = CLITools()

RULE = "=" * 60
THIN_RULE = "-" * 60


def say(context: AgogContext, message: str):
    """Print plain text, without rich markup or highlighting."""
    context.console.print(message, markup=False, highlight=False, soft_wrap=True)


def short_help(context: AgogContext):
    for line in (
        RULE,
        " agog - a command line tool for time and project management ",
        THIN_RULE,
        f" version {__version__}. try 'agog help' for more",
        RULE,
    ):
        say(context, line)


@cli_tools.tool
def help(context: AgogContext, args: List[str]) -> int:
    """show this command list"""
    say(context, RULE)
    say(context, "  Usage: agog [OPTIONS] [COMMAND] [ARGS]")
    say(context, THIN_RULE)
    say(context, "  COMMANDS:")
    for name, spec in cli_tools.tools.items():
        summary = (spec["docstring"] or "").partition("\n")[0]
        say(context, f"    {name} - {summary}")
    say(context, THIN_RULE)
    say(context, "  PROJECT OPTIONS:")
    say(context, "    (none)              - list projects")
    say(context, "    -c, --create NAME   - create a new project")
    say(context, "    -d, --destroy NAME  - delete a project and everything in it")
    say(context, RULE)
    return 0


@cli_tools.tool
def setup(context: AgogContext, args: List[str]) -> int:
    """create the agog storage directories"""
    projects_dir = setup_dirs(context)
    say(context, f"Projects are stored in {projects_dir}.")

    config_manager = context.config_manager
    if config_manager and not config_manager.config_path.exists():
        config_manager.save_config(context.config)
        say(context, f"Wrote configuration to {config_manager.config_path}.")
    return 0


@cli_tools.tool
def project(context: AgogContext, args: List[str]) -> int:
    """list or interact with active projects"""
    if not args:
        for name in list_projects(context):
            say(context, name)
        return 0

    subcommand = args[0]
    handler = PROJECT_OPTIONS.get(subcommand)
    if handler is None:
        say(context, f"Unrecognised option {subcommand} to agog-project.")
        return 0
    return handler(context, args[1:])


def project_create(context: AgogContext, args: List[str]) -> int:
    if not args:
        raise UsageError("agog-project-create requires argument : project name")
    name = args[0]
    try:
        create_project(context, name)
    except ProjectExistsError as e:
        say(context, str(e))
        return 0
    say(context, f"Created new project {name}.")
    return 0


def project_destroy(context: AgogContext, args: List[str]) -> int:
    if not args:
        raise UsageError("agog-project-destroy requires argument : project name")
    name = args[0]
    try:
        result = destroy_project(context, name)
    except ProjectNotFoundError as e:
        say(context, str(e))
        return 0
    except EraseError as e:
        context.console.print(
            f"[bold red]Error:[/bold red] project {escape(name)} was not destroyed: {escape(str(e))}",
            soft_wrap=True,
        )
        return 1

    if not result.ok:
        say(context, f"Project {name} was not fully destroyed:")
        for failure in result.failures:
            say(context, f"  {failure}")
    return 0


PROJECT_OPTIONS = {
    "-c": project_create,
    "--create": project_create,
    "-d": project_destroy,
    "--destroy": project_destroy,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="agog",
        description="A command line tool for time and project management",
        allow_abbrev=False,
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--home",
        type=Path,
        help="Directory holding agog data (default: ~/.agog, or AGOG_HOME env var)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Config file (default: ~/.agog/config.yaml, or AGOG_CONFIG env var)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Stop destroying a project at the first entry that cannot be removed",
    )
    parser.add_argument(
        "--include-hidden",
        action="store_true",
        help="Also delete dot-prefixed entries when destroying a project",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="warning",
        help="Log level (default: warning)",
    )
    parser.add_argument("command", nargs="?", help="Command to run (try 'help')")
    parser.add_argument("args", nargs=argparse.REMAINDER, help=argparse.SUPPRESS)
    return parser


def main(argv: List[str] | None = None, console: Console | None = None) -> int:
    load_dotenv()
    parsed_args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, parsed_args.log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
    )

    config_path = parsed_args.config or os.getenv("AGOG_CONFIG")
    config_manager = ConfigManager(config_path)
    config = config_manager.load_config()
    if parsed_args.home:
        config.home = parsed_args.home.expanduser()
    if parsed_args.strict:
        config.erase.strict = True
    if parsed_args.include_hidden:
        config.erase.skip_hidden = False

    context = AgogContext.create(config, console, config_manager=config_manager)

    if parsed_args.command is None:
        short_help(context)
        return 0

    tool = cli_tools.get(parsed_args.command)
    if tool is None:
        say(context, f"Unrecognised command {parsed_args.command}.")
        return 1

    try:
        return tool["invoke"](context, parsed_args.args)
    except UsageError as e:
        say(context, str(e))
        return 1
    except OSError as e:
        logger.debug("Command %s failed", parsed_args.command, exc_info=True)
        context.console.print(
            f"[bold red]Error:[/bold red] {escape(str(e))}", soft_wrap=True
        )
        return 1


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
