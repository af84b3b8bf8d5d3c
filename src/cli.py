"""Command-line interface for helixmap."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from artifacts.write import analyze_project, generate_all_artifacts
from catalog.catalog import CatalogError
from contract.validation import validate_artifacts
from rules.config import ConfigError, load_config, resolve_output_dir
from verify.verify import verify_determinism

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Project root holding helixmap.toml (default: .)",
    )


def _add_catalog_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--catalog",
        default=None,
        help="Catalog snapshot file (default: config catalog)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="helixmap")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=LOG_LEVELS,
        help="Logging verbosity (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser("generate", help="Generate artifacts")
    _add_common_paths(generate_parser)
    _add_catalog_option(generate_parser)
    generate_parser.add_argument(
        "--out-dir",
        default=None,
        help="Output directory for generated artifacts (default: config output dir)",
    )

    check_parser = subparsers.add_parser(
        "check", help="Report Helix layering violations"
    )
    _add_common_paths(check_parser)
    _add_catalog_option(check_parser)

    validate_parser = subparsers.add_parser("validate", help="Validate artifacts")
    _add_common_paths(validate_parser)
    validate_parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Artifacts directory (default: config output dir)",
    )

    verify_parser = subparsers.add_parser(
        "verify", help="Verify determinism of artifacts"
    )
    _add_common_paths(verify_parser)
    _add_catalog_option(verify_parser)
    verify_parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Artifacts directory (default: config output dir)",
    )

    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _resolve_path(value: str | None) -> Path | None:
    if value is None:
        return None
    return Path(value).expanduser().resolve()


def _resolve_artifacts_dir(root: Path, artifacts_dir: str | None) -> Path:
    if artifacts_dir is None:
        config = load_config(root)
        return resolve_output_dir(root, config.output_dir)
    return Path(artifacts_dir).expanduser().resolve()


def _handle_generate(root: Path, catalog: str | None, out_dir: str | None) -> int:
    generate_all_artifacts(
        root=root,
        out_dir=_resolve_path(out_dir),
        catalog_path=_resolve_path(catalog),
    )
    return 0


def _handle_check(root: Path, catalog: str | None) -> int:
    result, _ = analyze_project(root=root, catalog_path=_resolve_path(catalog))
    report = result.report
    for layer in report.layers:
        for error in layer.errors:
            sys.stdout.write(
                f"{layer.layer}/{error.module_name}: {error.dependent_path} -> "
                f"{error.dependency_path}: {error.message}\n"
            )
    if report.errors_detected:
        sys.stderr.write(f"{report.error_count} layering violation(s) found\n")
        return 1
    return 0


def _handle_validate(root: Path, artifacts_dir: str | None) -> int:
    resolved_artifacts_dir = _resolve_artifacts_dir(root, artifacts_dir)
    result = validate_artifacts(resolved_artifacts_dir)
    if result.errors:
        for error in result.errors:
            sys.stderr.write(f"{error.location()}: {error.message}\n")
        return 1
    return 0


def _handle_verify(root: Path, catalog: str | None, artifacts_dir: str | None) -> int:
    resolved_artifacts_dir = _resolve_artifacts_dir(root, artifacts_dir)
    try:
        result = verify_determinism(
            root=root,
            artifacts_dir=resolved_artifacts_dir,
            catalog_path=_resolve_path(catalog),
        )
    except (FileNotFoundError, NotADirectoryError) as exc:
        sys.stderr.write(f"artifacts-dir: {resolved_artifacts_dir}\n")
        sys.stderr.write(f"error: {exc}\n")
        return 2
    if not result.ok:
        for label, paths in (
            ("missing", result.missing),
            ("extra", result.extra),
            ("mismatches", result.mismatches),
        ):
            for path in paths:
                sys.stderr.write(f"{label}: {path}\n")
        return 1
    return 0


def _dispatch(args: argparse.Namespace, root: Path) -> int:
    if args.command == "generate":
        return _handle_generate(root, args.catalog, args.out_dir)

    if args.command == "check":
        return _handle_check(root, args.catalog)

    if args.command == "validate":
        return _handle_validate(root, args.artifacts_dir)

    if args.command == "verify":
        return _handle_verify(root, args.catalog, args.artifacts_dir)

    raise AssertionError


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    root = Path(args.root).expanduser().resolve()

    try:
        return _dispatch(args, root)
    except (CatalogError, ConfigError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
