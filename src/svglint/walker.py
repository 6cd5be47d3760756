from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Callable, Iterable

import typer

from .engine import validate_document
from .report import E1000_PARSE_ERROR, E1100_ACCESS_ERROR, FileFailure, LintReport, Violation
from .rules import DEFAULT_RULES, RuleSet
from .svg_checks import normalize_extension
from .xml_utils import parse_svg

logger = logging.getLogger(__name__)

Emit = Callable[[str], None]


def _is_watched(path: Path, extensions: tuple[str, ...]) -> bool:
    return normalize_extension(path.suffix) in extensions


def _access_violation(kind: str, path: Path, exc: OSError) -> Violation:
    return Violation(
        code=E1100_ACCESS_ERROR,
        message=f"Unable to read {kind}: {exc}",
        hint=f"Check that the {kind} exists and is readable.",
        context={"path": str(path)},
    )


def check_file(path: Path, rules: RuleSet = DEFAULT_RULES) -> Violation | None:
    """Parse one file and validate it, converting parse and I/O errors to violations."""
    try:
        doc = parse_svg(path)
    except (ET.ParseError, LookupError) as exc:
        return Violation(
            code=E1000_PARSE_ERROR,
            message=f"Failed to parse SVG: {exc}",
            hint="Ensure the SVG is well-formed XML.",
            context={"path": str(path), "tag": "svg"},
        )
    except OSError as exc:
        return _access_violation("file", path, exc)
    return validate_document(doc, rules)


class _TreeWalker:
    def __init__(self, rules: RuleSet, emit: Emit | None) -> None:
        self.rules = rules
        self.emit = emit
        self.report = LintReport()

    def _fail(self, path: Path, violation: Violation, stat: str = "files_failed") -> bool:
        self.report.stats[stat] += 1
        failure = FileFailure(path=str(path), violation=violation)
        self.report.failures.append(failure)
        if self.emit is not None:
            self.emit(failure.diagnostic())
        return False

    def visit_file(self, path: Path) -> bool:
        if not _is_watched(path, self.rules.extensions):
            logger.debug("Skipping unwatched file %s", path)
            return True
        self.report.stats["files_checked"] += 1
        violation = check_file(path, self.rules)
        if violation is None:
            logger.debug("Valid: %s", path)
            return True
        return self._fail(path, violation)

    def visit_dir(self, path: Path) -> bool:
        if path.name in self.rules.ignore_dirs:
            logger.debug("Ignoring directory %s", path)
            return True
        logger.debug("Entering directory %s", path)
        try:
            with os.scandir(path) as entries:
                children = list(entries)
        except OSError as exc:
            return self._fail(path, _access_violation("directory", path, exc), "dirs_failed")

        valid = True
        for entry in children:
            child = Path(entry.path)
            try:
                if entry.is_dir(follow_symlinks=False):
                    ok = self.visit_dir(child)
                elif entry.is_file():
                    ok = self.visit_file(child)
                else:
                    logger.debug("Skipping %s", child)
                    ok = True
            except OSError as exc:
                ok = self._fail(child, _access_violation("entry", child, exc))
            valid = ok and valid
        return valid

    def visit(self, path: Path) -> bool:
        try:
            is_dir = path.is_dir()
            is_file = not is_dir and path.is_file()
            if not (is_dir or is_file) and path.is_symlink():
                os.stat(path)
        except FileNotFoundError:
            logger.debug("Skipping dangling link %s", path)
            return True
        except OSError as exc:
            return self._fail(path, _access_violation("entry", path, exc))
        if is_dir:
            return self.visit_dir(path)
        if is_file:
            return self.visit_file(path)
        logger.debug("Skipping %s", path)
        return True


def lint_tree(
    path: Path | str,
    extensions: Iterable[str] | None = None,
    ignore_dirs: Iterable[str] | None = None,
    rules: RuleSet = DEFAULT_RULES,
    emit: Emit | None = None,
) -> LintReport:
    """Walk ``path`` depth-first and collect one failure per invalid file.

    ``extensions`` and ``ignore_dirs`` override the tables in ``rules`` when
    given. Diagnostics are passed to ``emit`` in visiting order; traversal
    always continues past a failing file.
    """
    rules = rules.with_walk_options(extensions=extensions, ignore_dirs=ignore_dirs)
    walker = _TreeWalker(rules, emit)
    walker.visit(Path(path))
    return walker.report


def walk(
    path: Path | str,
    extensions: Iterable[str] | None = None,
    ignore_dirs: Iterable[str] | None = None,
    rules: RuleSet = DEFAULT_RULES,
    emit: Emit | None = typer.echo,
) -> bool:
    """Return True when every watched file under ``path`` is valid.

    Extensions and ignored directory names default to the tables in ``rules``.
    """
    return lint_tree(path, extensions, ignore_dirs, rules=rules, emit=emit).ok
