# SPDX-License-Identifier: AGPL-3.0-only
"""Command line entry point for accessible-name checks.

Usage:
  accname check page.html
  accname check https://example.test/ --json --fail-on warn
  accname element page.html --selector "#search"
  accname categories
  accname watch site/
"""
import argparse
import json
import sys
from pathlib import Path

from accname.browser import BrowserUnavailableError, is_url, snapshot_url
from accname.config import GATE_MODES, REPORT_FORMATS, Config
from accname.dom import SoupDocument
from accname.locator import LOCATORS
from accname.report import format_text_report, gate, run_to_dict, write_report
from accname.runner import CATEGORIES, CATEGORY_NAMES, debug_element, run_accessibility_test
from accname.tree import validate_idrefs
from accname.types import RunError, RunOptions, VERDICTS

from . import __version__
from .watcher import watch

ERROR_SCHEMA = "accname.error.v1"
CHECK_SCHEMA = "accname.check.v1"


def _get_version():
    """Installed package version for CLI reporting."""
    return __version__


def _json_dumps(payload, indent=None):
    """JSON serialize payload using CLI defaults."""
    return json.dumps(payload, ensure_ascii=True, indent=indent, default=str)


def _load_config(args):
    """Explicit --config file, else the nearest accname.toml, else defaults."""
    if getattr(args, "config", None):
        return Config.load(Path(args.config))
    target = getattr(args, "target", None)
    if target and target != "-" and not is_url(target):
        start = Path(target)
        return Config.discover(start if start.is_dir() else start.parent)
    return Config.discover(Path.cwd())


def _run_options(args, config):
    """Merge command line overrides over the [audit] config section."""
    base = config.run_options()
    categories = base.categories
    if getattr(args, "category", None):
        categories = tuple(args.category)
    locator = getattr(args, "locator", None) or base.locator
    inline_style_check = base.inline_style_check
    if getattr(args, "no_inline_style_check", False):
        inline_style_check = False
    return RunOptions(categories=categories, inline_style_check=inline_style_check, locator=locator)


def _load_document(target, timeout_ms=30000):
    """Parse a file, stdin ('-') or a live URL into a document."""
    if target == "-":
        return SoupDocument.from_html(sys.stdin.read())
    if is_url(target):
        return snapshot_url(target, timeout_ms=timeout_ms)
    path = Path(target)
    if not path.is_file():
        raise FileNotFoundError(f"No such file: {path}")
    return SoupDocument.from_path(path)


def _run_target(args, options):
    """Run every selected category over the target, as a TestRun or RunError."""
    try:
        document = _load_document(args.target, timeout_ms=args.timeout_ms)
    except BrowserUnavailableError as exc:
        return RunError(str(exc))
    except OSError as exc:
        return RunError(f"Could not read {args.target}: {exc}")
    return run_accessibility_test(document, options=options)


def _check_once(args):
    """Run, write and print one check. Returns True when the gate passes."""
    config = _load_config(args)
    options = _run_options(args, config)
    fail_on = args.fail_on or config.get_fail_on()
    fmt = args.format or config.get_report_format()
    out_path = Path(args.out) if args.out else config.get_output_path()

    run = _run_target(args, options)
    if isinstance(run, RunError):
        raise RuntimeError(run.reason)

    passed = gate(run, fail_on)
    if out_path is not None:
        written = write_report(run, out_path, fmt)
        if not args.json:
            sys.stdout.write(f"[ok] wrote {written}\n")

    if args.json:
        payload = run_to_dict(run)
        payload["schema"] = CHECK_SCHEMA
        payload["gate"] = {"fail_on": fail_on, "passed": passed}
        if args.only:
            payload["results"] = [r for r in payload["results"] if r["verdict"] == args.only]
        sys.stdout.write(_json_dumps(payload) + "\n")
    else:
        sys.stdout.write(format_text_report(run, only=args.only))
        if not passed:
            sys.stdout.write(f"[gate] failed (fail_on={fail_on})\n")
    return passed


def cmd_check(args):
    """CLI handler for checking a document."""
    if not _check_once(args):
        raise SystemExit(1)


def cmd_element(args):
    """CLI handler for inspecting the elements matched by one selector."""
    config = _load_config(args)
    options = _run_options(args, config)
    document = _load_document(args.target, timeout_ms=args.timeout_ms)
    elements = document.select(args.selector)
    if not elements:
        raise ValueError(f"No element matches {args.selector!r}")
    if not args.all:
        elements = elements[:1]
    entries = [debug_element(element, options=options) for element in elements]
    if args.json:
        payload = {"schema": "accname.element.v1", "ok": True, "selector": args.selector, "elements": entries}
        sys.stdout.write(_json_dumps(payload) + "\n")
        return
    for entry in entries:
        sys.stdout.write(f"{entry['tagName']} {entry['selector']}\n")
        sys.stdout.write(f"  name: {entry['accessibleName']!r} (source: {entry['nameSource']})\n")
        sys.stdout.write(f"  category: {entry['category'] or '-'}\n")
        sys.stdout.write(f"  visible: {entry['isVisible']}\n")
        annotations = {k: v for k, v in entry["annotations"].items() if v}
        if annotations:
            sys.stdout.write(f"  annotations: {annotations}\n")
        result = entry["result"]
        if result is not None:
            sys.stdout.write(f"  result: {result['result']} - {result['description']}\n")


def cmd_categories(args):
    """CLI handler for listing category names and their selectors."""
    rows = [
        {"name": c.name, "selector": c.selector, "description": c.description}
        for c in CATEGORIES
    ]
    if args.json:
        sys.stdout.write(_json_dumps({"schema": "accname.categories.v1", "ok": True, "categories": rows}) + "\n")
        return
    width = max(len(name) for name in CATEGORY_NAMES)
    for row in rows:
        sys.stdout.write(f"{row['name'].ljust(width)}  {row['description']}\n")


def cmd_idrefs(args):
    """CLI handler for listing ID references that point at nothing."""
    document = _load_document(args.target, timeout_ms=args.timeout_ms)
    broken = validate_idrefs(document)
    if args.json:
        payload = {"schema": "accname.idrefs.v1", "ok": not broken, "broken": broken}
        sys.stdout.write(_json_dumps(payload) + "\n")
    elif not broken:
        sys.stdout.write("[ok] every ID reference resolves\n")
    else:
        for entry in broken:
            sys.stdout.write(f"[broken] <{entry['tag']}> {entry['attribute']}={entry['id']!r}\n")
    if broken:
        raise SystemExit(1)


def cmd_watch(args):
    """Re-run the check whenever an HTML file under the target changes."""
    path = Path(args.target)
    if not path.exists():
        raise FileNotFoundError(f"No such file or directory: {path}")
    watch(path, lambda: _check_once(args), delay=args.delay)


def _add_run_flags(p):
    """Flags shared by commands that evaluate a document."""
    p.add_argument("target", help="HTML file, '-' for stdin, or an http(s)/file URL")
    p.add_argument("--locator", choices=sorted(LOCATORS))
    p.add_argument("--category", action="append", choices=list(CATEGORY_NAMES),
                   help="Only run this category (repeatable)")
    p.add_argument("--no-inline-style-check", action="store_true",
                   help="Ignore display/visibility/opacity written in style attributes")
    p.add_argument("--timeout-ms", type=int, default=30000, help="Page load timeout for URLs")
    p.add_argument("--json", action="store_true")


def _add_check_flags(p):
    """Flags shared by check and watch."""
    _add_run_flags(p)
    p.add_argument("--out", help="Write the report to this path")
    p.add_argument("--format", choices=list(REPORT_FORMATS))
    p.add_argument("--fail-on", choices=list(GATE_MODES))
    p.add_argument("--only", choices=list(VERDICTS), help="Only print results with this verdict")


def _build_parser():
    """Construct and return the top-level CLI parser."""
    parser = argparse.ArgumentParser(prog="accname")
    parser.add_argument("--config")
    parser.add_argument("--version", action="version", version="accname " + _get_version())
    parser.add_argument("--json", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    p_check = sub.add_parser("check", help="Check every element of a document")
    _add_check_flags(p_check)
    p_check.set_defaults(func=cmd_check)

    p_element = sub.add_parser("element", help="Explain the name and verdict of matching elements")
    _add_run_flags(p_element)
    p_element.add_argument("--selector", required=True)
    p_element.add_argument("--all", action="store_true", help="Every match instead of the first")
    p_element.set_defaults(func=cmd_element)

    p_categories = sub.add_parser("categories", help="List element categories")
    p_categories.add_argument("--json", action="store_true")
    p_categories.set_defaults(func=cmd_categories)

    p_idrefs = sub.add_parser("idrefs", help="List ID references that do not resolve")
    p_idrefs.add_argument("target")
    p_idrefs.add_argument("--timeout-ms", type=int, default=30000)
    p_idrefs.add_argument("--json", action="store_true")
    p_idrefs.set_defaults(func=cmd_idrefs)

    p_watch = sub.add_parser("watch", help="Re-check HTML files when they change")
    _add_check_flags(p_watch)
    p_watch.add_argument("--delay", type=float, default=0.5, help="Debounce window in seconds")
    p_watch.set_defaults(func=cmd_watch)
    return parser


def main(argv=None):
    """Execute CLI command dispatch and standardized error handling."""
    argv = list(sys.argv[1:] if argv is None else argv)
    force_json = "--json" in argv
    parser = _build_parser()
    args = parser.parse_args(argv)
    if force_json:
        args.json = True
    try:
        args.func(args)
    except Exception as exc:
        if args.json:
            err = {
                "schema": ERROR_SCHEMA,
                "ok": False,
                "code": "CLI_ERROR",
                "message": str(exc),
            }
            sys.stdout.write(json.dumps(err, ensure_ascii=True) + "\n")
        else:
            sys.stderr.write(f"[error] {exc}\n")
        return 3
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
