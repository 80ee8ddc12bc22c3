"""Command-line interface for branchpreview."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv

from . import __version__

logger = logging.getLogger("branchpreview")


def _load_dotenv_files() -> None:
    """Load ``.env`` from the working directory without overriding the environment."""
    load_dotenv(Path.cwd() / ".env", override=False)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="branchpreview",
        description="Provision per-branch preview deployments on a shared host",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"branchpreview {__version__}",
    )
    parser.add_argument(
        "--refslug",
        default="",
        help="$CI_COMMIT_REF_SLUG: lowercased ref name, shortened to 63 bytes, with "
        "everything except 0-9 and a-z replaced with -. Used as the branch directory name.",
    )
    parser.add_argument(
        "--repourl",
        default="",
        help="The URL to clone the Git repository",
    )
    parser.add_argument(
        "--commitsha",
        default="",
        help="The commit revision for which project is built",
    )
    parser.add_argument(
        "--projectname",
        default="",
        help="The project that is currently being built (its subdir name)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Settings path (default: $BRANCHPREVIEW_CONFIG or ./env.json)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log directories and commands without creating or running them",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit machine-readable JSON output",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    _load_dotenv_files()

    try:
        # Import here to avoid slow startup
        from .app import PreviewApp
        from .commands.deploy import run_deploy
        from .settings import default_config_path

        config_path = args.config or default_config_path()
        app = PreviewApp.from_config(config_path, dry_run=args.dry_run)
        return run_deploy(args, app=app)
    except Exception as exc:
        from .commands.output import emit_output, error_payload
        from .errors import exit_code_for_exception

        logger.error("%s", exc)
        if args.json:
            emit_output(
                command="deploy",
                payload=error_payload(exc, refslug=args.refslug, projectname=args.projectname),
                json_output=True,
            )
        return exit_code_for_exception(exc)


if __name__ == "__main__":
    sys.exit(main())
