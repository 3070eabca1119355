from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from version_checker.checker import run_checks
from version_checker.config import Settings
from version_checker.errors import InvalidVersionFormatError, MissingFieldError
from version_checker.logging_utils import setup_logging
from version_checker.models import CheckManifest, CheckReport
from version_checker.params import BinaryKind, CheckVersionParams, validate_params


def _read_json(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


def _print_reports(reports: list[CheckReport]) -> None:
    print(json.dumps([r.model_dump() for r in reports], ensure_ascii=False, indent=2))


def _exit_code(reports: list[CheckReport]) -> int:
    return 1 if any(r.status == "failed" for r in reports) else 0


def _manifest_from_settings(settings: Settings) -> CheckManifest:
    checks = [
        {"binary": binary, "minimum_version": minimum, "working_dir": settings.default_working_dir}
        for binary, minimum in sorted(settings.min_binary_versions.items())
    ]
    return CheckManifest.model_validate({"checks": checks})


def cmd_check(args: argparse.Namespace) -> int:
    settings = Settings.load()
    params = CheckVersionParams(
        binary=args.binary,
        minimum_version=args.minimum_version,
        working_dir=args.workdir,
    )
    try:
        validate_params(params)
    except (MissingFieldError, InvalidVersionFormatError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    [report] = run_checks([params], settings=settings)
    print(report.model_dump_json(indent=2))
    return _exit_code([report])


def cmd_batch(args: argparse.Namespace) -> int:
    settings = Settings.load()

    try:
        if args.path:
            manifest = CheckManifest.model_validate(_read_json(Path(args.path)))
        else:
            manifest = _manifest_from_settings(settings)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
        print(f"ERROR: invalid manifest: {e}", file=sys.stderr)
        return 2

    if not manifest.checks:
        print("ERROR: no checks given (pass a manifest or set MIN_BINARY_VERSIONS)", file=sys.stderr)
        return 2

    reports = run_checks(manifest.to_params(), settings=settings)
    _print_reports(reports)
    return _exit_code(reports)


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    settings = Settings.load()
    setup_logging(settings.log_level, json_output=settings.log_json)

    parser = argparse.ArgumentParser(prog="version-checker")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_check = sub.add_parser("check", help="Check one binary against a minimum version")
    p_check.add_argument("binary", help="One of: " + ", ".join(b.value for b in BinaryKind))
    p_check.add_argument("minimum_version")
    p_check.add_argument("--workdir", default=settings.default_working_dir)
    p_check.set_defaults(func=cmd_check)

    p_batch = sub.add_parser("batch", help="Run every check from a JSON manifest or MIN_BINARY_VERSIONS")
    p_batch.add_argument("path", nargs="?", default=None)
    p_batch.set_defaults(func=cmd_batch)

    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
