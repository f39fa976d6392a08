"""Audit tool for event templates.

Compares the ``(domain, action)`` pairs passed to ``log_event`` across the
``ircbot`` package with the entries of ``ircbot/logs/event_templates.json``.

Usage:
  python scripts/event_template_audit.py [--json-output]

Exit code 1 when code references a template the JSON file lacks.
"""

from __future__ import annotations

import argparse
import ast
import json
import sys
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
PACKAGE_ROOT = PROJECT_ROOT / "ircbot"
TEMPLATES_JSON = PACKAGE_ROOT / "logs" / "event_templates.json"

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ircbot.logs.event_catalog import (  # noqa: E402
    EVENT_TEMPLATES,
    reload_event_templates,
)


def iter_python_files(root: Path) -> Iterable[Path]:
    for path in root.rglob("*.py"):
        if path.name.startswith("."):
            continue
        yield path


def _gather_string_literals(expr: ast.AST) -> set[str]:
    """Return the string constants in expr, following both ternary branches."""
    out: set[str] = set()
    if isinstance(expr, ast.Constant) and isinstance(expr.value, str):
        out.add(expr.value)
    elif isinstance(expr, ast.IfExp):
        out.update(_gather_string_literals(expr.body))
        out.update(_gather_string_literals(expr.orelse))
    return out


def _is_log_event_call(node: ast.Call) -> bool:
    func = node.func
    return isinstance(func, ast.Attribute) and func.attr == "log_event"


def _extract_from_call(node: ast.Call) -> set[tuple[str, str]]:
    domain_expr: ast.AST | None = node.args[0] if node.args else None
    action_expr: ast.AST | None = node.args[1] if len(node.args) >= 2 else None
    for kw in node.keywords or []:
        if kw.arg == "domain":
            domain_expr = kw.value
        elif kw.arg == "action":
            action_expr = kw.value
    if not (
        isinstance(domain_expr, ast.Constant) and isinstance(domain_expr.value, str)
    ):
        return set()
    if action_expr is None:
        return set()
    return {(domain_expr.value, a) for a in _gather_string_literals(action_expr)}


def extract_references(paths: Iterable[Path]) -> set[tuple[str, str]]:
    refs: set[tuple[str, str]] = set()
    for path in paths:
        try:
            tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
        except (OSError, SyntaxError, UnicodeDecodeError):
            continue
        for node in ast.walk(tree):
            if isinstance(node, ast.Call) and _is_log_event_call(node):
                refs.update(_extract_from_call(node))
    return refs


def load_templates_from_json() -> set[tuple[str, str]]:
    try:
        with TEMPLATES_JSON.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError:
        return set()
    result: set[tuple[str, str]] = set()
    if isinstance(raw, dict):
        for domain, actions in raw.items():
            if isinstance(actions, dict):
                result.update((domain, action) for action in actions)
    return result


@dataclass(slots=True)
class DiffResult:
    missing: set[tuple[str, str]]
    unused: set[tuple[str, str]]
    discrepancy: set[tuple[str, str]]


def diff() -> DiffResult:
    reload_event_templates()
    code_refs = extract_references(iter_python_files(PACKAGE_ROOT))
    json_templates = load_templates_from_json()
    loaded = set(EVENT_TEMPLATES)
    return DiffResult(
        missing=code_refs - json_templates,
        unused=json_templates - code_refs,
        discrepancy=loaded ^ json_templates,
    )


def parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Audit event templates vs code usages")
    parser.add_argument(
        "--json-output", action="store_true", help="Emit JSON diff result"
    )
    return parser.parse_args(argv)


def emit_json(d: DiffResult) -> None:
    print(
        json.dumps(
            {
                "missing": sorted(d.missing),
                "unused": sorted(d.unused),
                "discrepancy": sorted(d.discrepancy),
            },
            indent=2,
        )
    )


def emit_human(d: DiffResult) -> None:
    print("Event Template Audit Report")
    print("============================")
    print(f"Templates in JSON:  {len(load_templates_from_json())}")
    print(f"Loaded at runtime:  {len(EVENT_TEMPLATES)}")
    print()
    for title, pairs in (("Missing", d.missing), ("Unused", d.unused)):
        if not pairs:
            print(f"No {title.lower()} templates found.\n")
            continue
        print(f"{title} templates ({len(pairs)}):")
        for domain, action in sorted(pairs):
            print(f"  - {domain}:{action}")
        print()
    if d.discrepancy:
        print("Discrepancy between JSON and loaded templates (likely load error):")
        for domain, action in sorted(d.discrepancy):
            print(f"  - {domain}:{action}")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    result = diff()
    if args.json_output:
        emit_json(result)
    else:
        emit_human(result)
    return 1 if result.missing else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
