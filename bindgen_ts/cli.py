"""CLI entrypoint: generate-bindings."""

import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from bindgen_ts.core.errors import ConfigError
from bindgen_ts.core.config import load_bindgen_config, resolve_output_dir
from bindgen_ts.core.registry import default_exports
from bindgen_ts.core.integrator import generate, import_modules, load_app_commands

EXIT_OK = 0
EXIT_ENTITY_FAILED = 1
EXIT_USAGE = 2

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="generate-bindings",
        description="Generate TypeScript bindings for backend commands and entities.",
    )
    parser.add_argument(
        "modules",
        nargs="*",
        help="Modules to import; their @command and @entity exports are generated.",
    )
    parser.add_argument(
        "--out",
        default=None,
        help="Output directory (defaults to config output.location, then ../src-gen).",
    )
    parser.add_argument(
        "--app",
        default=None,
        help="FastAPI app as 'package.module:attribute' whose routes become commands.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to bindgen.config.json (defaults to the one in the project root).",
    )
    parser.add_argument(
        "--project-root",
        default=".",
        help="Project root used for config lookup and module imports.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the files that would be written without touching the disk.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Increase log verbosity for troubleshooting.",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run one generation; returns the process exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s: %(message)s')

    project_root = str(Path(args.project_root).resolve())

    try:
        config = load_bindgen_config(project_root, config_path=args.config)
        modules = args.modules or config.modules
        app_path = args.app or config.app

        import_modules(modules, project_root)
        extra_commands = load_app_commands(app_path, project_root) if app_path else []
    except ConfigError as exc:
        print(f"generate-bindings: {exc}", file=sys.stderr)
        return EXIT_USAGE

    out = args.out if args.out is not None else config.output.location
    logger.debug(f"Run-level output directory: {resolve_output_dir(out)}")

    report = generate(
        exports=default_exports,
        out=out,
        extra_commands=extra_commands,
        write=not args.dry_run,
    )

    if args.dry_run:
        for generated in report.written:
            print(f"would write {generated.path}")

    for failure in report.failures:
        print(f"failed: {failure.error}", file=sys.stderr)

    print(f"bindgen-ts: Generated {len(report.written)} TypeScript files ({len(report.failures)} failed)")
    return EXIT_OK if report.ok else EXIT_ENTITY_FAILED


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
