"""
Command line interface

    laravel-shb build [--clean] [--install-deps] [--clear-cache] [--zip]

Run from the root of a Laravel project. Exits with status 1 if any stage fails.
"""
import argparse
import logging
import sys
from typing import Dict, List, Optional

from pydantic import ValidationError

from laravel_shb import __version__
from laravel_shb.config import load_settings
from laravel_shb.pipeline import BuildPipeline, PipelineError
from laravel_shb.schemas import BuildConfig, EntryTemplate, StalePolicy

logger = logging.getLogger(__name__)


def create_parser(settings: Optional[Dict[str, Optional[str]]] = None) -> argparse.ArgumentParser:
    """Build the parser; option defaults come from SHB_* settings"""
    settings = settings or load_settings()

    parser = argparse.ArgumentParser(
        prog="laravel-shb",
        description="Prepare Laravel projects for shared hosting deployment",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug output")

    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Build Laravel project for shared hosting deployment",
        description="Build Laravel project for shared hosting deployment",
    )
    build_parser.add_argument(
        "-c", "--clean", action="store_true",
        help="Clean dist folder before building",
    )
    build_parser.add_argument(
        "--install-deps", action="store_true",
        help="Run composer install and npm install/build first",
    )
    build_parser.add_argument(
        "--clear-cache", action="store_true",
        help="Run php artisan optimize:clear first",
    )
    build_parser.add_argument(
        "-z", "--zip", action="store_true",
        help="Compress the dist folder into <archive-name>.zip",
    )
    build_parser.add_argument(
        "--entry-template",
        choices=[t.value for t in EntryTemplate],
        default=settings["SHB_ENTRY_TEMPLATE"],
        help="index.php bootstrap style: kernel (Laravel <= 10) or application (Laravel >= 11)",
    )
    build_parser.add_argument(
        "--stale-policy",
        choices=[p.value for p in StalePolicy],
        default=settings["SHB_STALE_POLICY"],
        help="Keep (retain) or delete (mirror) staged files whose source is gone",
    )
    build_parser.add_argument(
        "--timeout", default=settings["SHB_COMMAND_TIMEOUT"], metavar="SECONDS",
        help="Abort external commands that run longer than this",
    )
    build_parser.add_argument(
        "--workers", default=settings["SHB_MAX_WORKERS"], metavar="N",
        help="Parallel file operations per stage",
    )
    build_parser.add_argument("--output-dir", default=settings["SHB_OUTPUT_DIR"], help="Output folder name")
    build_parser.add_argument("--archive-name", default=settings["SHB_ARCHIVE_NAME"], help="Archive name without .zip")
    build_parser.add_argument("--project-root", default=None, help="Project directory (default: cwd)")

    return parser


def config_from_args(args: argparse.Namespace) -> BuildConfig:
    return BuildConfig(
        clean=args.clean,
        install_dependencies=args.install_deps,
        clear_cache=args.clear_cache,
        create_archive=args.zip,
        entry_template=args.entry_template,
        stale_policy=args.stale_policy,
        command_timeout=args.timeout,
        max_workers=args.workers,
        output_dir_name=args.output_dir,
        archive_name=args.archive_name,
    )


def main(argv: Optional[List[str]] = None) -> int:
    # .shb.env is read from the project being built, not the cwd
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument("--project-root", default=None)
    known, _ = pre_parser.parse_known_args(argv)

    parser = create_parser(load_settings(known.project_root))
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    try:
        config = config_from_args(args)
    except ValidationError as e:
        parser.error(str(e))

    try:
        BuildPipeline(config=config, project_root=args.project_root).run()
    except PipelineError as e:
        print(f"❌ Build failed: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
