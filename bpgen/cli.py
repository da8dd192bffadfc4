"""Command line interface for bpgen.

Usage::

    bp generate component user-profile --dest src/components
    bp generate component user-profile props[]=id props[]=name
    bp new component
    bp new component --source ./existing-component --global
    bp list --long
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence
from pathlib import Path

from bpgen.actions import (
    ActionResult,
    create_blank,
    create_from_directory,
    generate,
    list_blueprints,
)
from bpgen.config import Config
from bpgen.utils import LogBuffer, print_error


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bp",
        description="bpgen -- generate files and folders from reusable blueprints",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  bp generate component user-profile\n"
            "  bp generate component user-profile --dest src title=Profile\n"
            "  bp new component --global\n"
            "  bp list --long\n"
        ),
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate", aliases=["g"], help="generate an instance of a blueprint"
    )
    generate_parser.add_argument("blueprint", help="Name of the blueprint to use")
    generate_parser.add_argument("instance", help="Name of the new blueprint instance")
    generate_parser.add_argument(
        "template_args",
        nargs="*",
        metavar="KEY=VALUE",
        help="Extra template data; KEY[]=VALUE or KEY[INDEX]=VALUE build lists",
    )
    generate_parser.add_argument(
        "--dest", "-d",
        type=Path,
        default=None,
        help="Destination directory (default: current directory)",
    )

    new_parser = subparsers.add_parser("new", help="create a new blueprint")
    new_parser.add_argument("name", help="Name of the new blueprint")
    new_parser.add_argument(
        "--global", "-g",
        dest="global_",
        action="store_true",
        help="Create the blueprint in the global blueprints directory",
    )
    new_parser.add_argument(
        "--source", "-s",
        nargs="?",
        const="",
        default=None,
        help="Build the blueprint from a directory (current directory when no value is given)",
    )

    list_parser = subparsers.add_parser("list", aliases=["ls"], help="list available blueprints")
    list_parser.add_argument("namespace", nargs="?", default="", help="Sub-directory to list")
    list_parser.add_argument(
        "--long", "-l", action="store_true", help="Show blueprint descriptions"
    )

    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse *argv*, letting template arguments follow ``generate`` options.

    ``bp generate component user-profile --dest src title=Profile`` leaves
    ``title=Profile`` unmatched after ``--dest``; those leftovers are appended
    to the template arguments. Leftovers for any other command are errors.
    """
    parser = build_parser()
    args, extras = parser.parse_known_args(argv)
    if extras:
        if args.command not in ("generate", "g"):
            parser.error(f"unrecognized arguments: {' '.join(extras)}")
        args.template_args = [*args.template_args, *extras]
    return args


async def _dispatch(args: argparse.Namespace, config: Config, log: LogBuffer) -> ActionResult:
    if args.command in ("generate", "g"):
        return await generate(
            args.blueprint,
            args.instance,
            destination=args.dest,
            args=args.template_args,
            config=config,
            log=log,
        )
    if args.command == "new":
        if args.source is not None:
            return await create_from_directory(
                args.name,
                source=args.source or None,
                global_=args.global_,
                config=config,
                log=log,
            )
        return await create_blank(args.name, global_=args.global_, config=config, log=log)
    return await list_blueprints(args.namespace, long=args.long, config=config, log=log)


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point for ``bp``."""
    args = parse_args(argv)

    try:
        config = Config.from_env()
    except ValueError as exc:
        print_error(f"Error: invalid configuration: {exc}")
        return 1

    log = LogBuffer(quiet=config.quiet)
    result = asyncio.run(_dispatch(args, config, log))
    log.flush()
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
