#!/usr/bin/env python3
"""Custom linting rules for weighted-selector.

Rules:
1. No class-based tests in test files (use module-level functions)
2. No imports inside functions in library code
3. No mutable default arguments
4. No print() in library code (use logging)
5. No TODO/FIXME comments without issue references
6. No bare ``except:`` in library code

Usage: python scripts/extra_lints.py [PATH ...]
"""

import ast
import re
import sys
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

DEFAULT_DIRECTORIES = ("src", "tests")
TODO_PATTERN = re.compile(r"#\s*(TODO|FIXME)(?!\(#\d+\))", re.IGNORECASE)


@dataclass
class LintError:
    file: Path
    line: int
    column: int
    rule: str
    message: str

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}: {self.rule}: {self.message}"


class LintVisitor(ast.NodeVisitor):
    """Collects rule violations for a single module."""

    def __init__(self, file: Path) -> None:
        self.file = file
        self.errors: list[LintError] = []
        self._is_test_file = file.name.startswith(("test_", "conftest"))
        self._function_depth = 0

    def _add_error(self, node: ast.AST, rule: str, message: str) -> None:
        lineno = getattr(node, "lineno", 0)
        col_offset = getattr(node, "col_offset", 0)
        self.errors.append(LintError(self.file, lineno, col_offset, rule, message))

    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        # Hypothesis state machines expose ``Machine.TestCase``; those are fine
        if self._is_test_file and node.name.startswith("Test"):
            is_hypothesis_stateful = any(
                isinstance(base, ast.Attribute) and base.attr == "TestCase"
                for base in node.bases
            )
            if not is_hypothesis_stateful:
                msg = f"Class-based test '{node.name}' found. Use functions."
                self._add_error(node, "no-class-tests", msg)
        self.generic_visit(node)

    def _visit_function(self, node: ast.FunctionDef | ast.AsyncFunctionDef) -> None:
        self._function_depth += 1
        for default in node.args.defaults + node.args.kw_defaults:
            if default is not None and is_mutable_default(default):
                msg = "Mutable default argument. Use None instead."
                self._add_error(default, "mutable-default", msg)
        self.generic_visit(node)
        self._function_depth -= 1

    visit_FunctionDef = _visit_function
    visit_AsyncFunctionDef = _visit_function

    def _check_import(self, node: ast.Import | ast.ImportFrom) -> None:
        if self._function_depth > 0 and not self._is_test_file:
            self._add_error(
                node,
                "import-in-function",
                "Import inside function. Move to module level.",
            )
        self.generic_visit(node)

    visit_Import = _check_import
    visit_ImportFrom = _check_import

    def visit_Call(self, node: ast.Call) -> None:
        is_print = isinstance(node.func, ast.Name) and node.func.id == "print"
        if is_print and not self._is_test_file:
            self._add_error(
                node,
                "no-print",
                "Use logging instead of print() in library code.",
            )
        self.generic_visit(node)

    def visit_ExceptHandler(self, node: ast.ExceptHandler) -> None:
        if node.type is None and not self._is_test_file:
            self._add_error(
                node,
                "bare-except",
                "Bare except. Catch a specific exception type.",
            )
        self.generic_visit(node)


def is_mutable_default(node: ast.expr) -> bool:
    if isinstance(node, (ast.List, ast.Dict, ast.Set)):
        return True
    return (
        isinstance(node, ast.Call)
        and isinstance(node.func, ast.Name)
        and node.func.id in ("list", "dict", "set")
    )


def check_todo_comments(file: Path, source: str) -> list[LintError]:
    """TODO/FIXME comments must name an issue, e.g. ``TODO(#12)``."""
    errors: list[LintError] = []
    for i, line in enumerate(source.splitlines(), 1):
        match = TODO_PATTERN.search(line)
        if match:
            msg = f"{match.group(1)} needs an issue reference, e.g. TODO(#12)."
            errors.append(LintError(file, i, match.start(), "todo-needs-issue", msg))
    return errors


def lint_source(file: Path, source: str) -> list[LintError]:
    try:
        tree = ast.parse(source, filename=str(file))
    except SyntaxError as e:
        return [LintError(file, e.lineno or 0, e.offset or 0, "syntax-error", str(e))]
    visitor = LintVisitor(file)
    visitor.visit(tree)
    return visitor.errors + check_todo_comments(file, source)


def lint_file(path: Path) -> list[LintError]:
    return lint_source(path, path.read_text())


def iter_python_files(paths: Iterable[Path]) -> Iterable[Path]:
    for path in paths:
        if path.is_dir():
            yield from sorted(path.rglob("*.py"))
        elif path.suffix == ".py":
            yield path


def lint_paths(paths: Iterable[Path]) -> list[LintError]:
    errors: list[LintError] = []
    for py_file in iter_python_files(paths):
        errors.extend(lint_file(py_file))
    return sorted(errors, key=lambda e: (str(e.file), e.line, e.column))


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    paths = [Path(a) for a in args] or [
        Path(d) for d in DEFAULT_DIRECTORIES if Path(d).exists()
    ]
    errors = lint_paths(paths)

    if errors:
        for error in errors:
            print(error)
        print(f"\nFound {len(errors)} custom lint error(s)")
        return 1

    print("All custom lint checks passed!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
