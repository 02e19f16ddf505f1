"""Command line entry point for create-droid.

Usage:
    create-droid create my-app --variant compose --addon hilt --addon coil
    create-droid install retrofit --project ./my-app
    create-droid addons
    create-droid variants
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from src.addons.recipes import builtin_registry
from src.scaffold.config import default_sdk_dir, log_level
from src.scaffold.materializer import (
    ProjectOptions,
    TemplateNotFoundError,
    generate_project,
    install_addons,
)
from src.templates.registry import DEFAULT_VARIANT_ID, all_variants, parse_variant_id
from src.versions.resolver import build_version_patch_map

logger = logging.getLogger("create_droid")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="create-droid", description="Scaffold an Android project from templates."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    create = sub.add_parser("create", help="Generate a new project")
    create.add_argument("directory", help="Destination directory")
    create.add_argument("--name", help="Project display name (defaults to the directory name)")
    create.add_argument(
        "--variant",
        default=DEFAULT_VARIANT_ID,
        help="Template variant (see `create-droid variants`)",
    )
    create.add_argument(
        "--addon", action="append", default=[], dest="addons", help="Addon to install (repeatable)"
    )
    create.add_argument("--sdk-path", help="Android SDK location written to local.properties")
    create.add_argument(
        "--offline", action="store_true", help="Skip registry lookups and use pinned versions"
    )
    create.add_argument("--no-git", action="store_true", help="Do not initialize a git repository")

    install = sub.add_parser("install", help="Add addons to an existing project")
    install.add_argument("addons", nargs="+", help="Addon names")
    install.add_argument("--project", default=".", help="Project directory (default: .)")
    install.add_argument(
        "--offline", action="store_true", help="Skip registry lookups and use pinned versions"
    )

    sub.add_parser("addons", help="List built-in addons")
    sub.add_parser("variants", help="List template variants")
    return parser


def _cmd_create(args: argparse.Namespace) -> int:
    variant = parse_variant_id(args.variant)
    if variant is None:
        logger.error("Unknown variant %r", args.variant)
        return 1

    project_path = Path(args.directory).expanduser().resolve()
    project_name = (args.name or "").strip() or project_path.name

    logger.info("Resolving dependency versions...")
    versions = build_version_patch_map(offline=args.offline)

    logger.info("Scaffolding project in %s...", project_path)
    try:
        generate_project(
            ProjectOptions(
                project_path=project_path,
                project_name=project_name,
                variant=variant,
                sdk_path=args.sdk_path or default_sdk_dir(),
                addons=tuple(args.addons),
                versions=versions,
                init_git=False if args.no_git else None,
            )
        )
    except TemplateNotFoundError as exc:
        logger.error("%s", exc)
        return 1

    logger.info("Project created at %s", project_path)
    print("To get started:")
    print(f"  cd {args.directory}")
    print("  ./gradlew installDebug")
    return 0


def _cmd_install(args: argparse.Namespace) -> int:
    versions = build_version_patch_map(offline=args.offline)
    try:
        installed = install_addons(args.project, list(args.addons), versions=versions)
    except FileNotFoundError as exc:
        logger.error("%s", exc)
        return 1
    missing = [n for n in args.addons if n not in installed]
    if missing:
        logger.warning("Not installed: %s", ", ".join(missing))
    return 0 if installed else 1


def _cmd_addons(_args: argparse.Namespace) -> int:
    for name, recipe in sorted(builtin_registry().items()):
        deps = f" (requires {', '.join(recipe.dependencies)})" if recipe.dependencies else ""
        print(f"{name:<15} {recipe.description}{deps}")
    return 0


def _cmd_variants(_args: argparse.Namespace) -> int:
    for spec in all_variants():
        print(f"{spec.variant_id:<27} {spec.label} - {spec.description}")
    return 0


_COMMANDS = {
    "create": _cmd_create,
    "install": _cmd_install,
    "addons": _cmd_addons,
    "variants": _cmd_variants,
}


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else log_level(),
        format="%(levelname)s %(message)s",
    )
    return _COMMANDS[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
