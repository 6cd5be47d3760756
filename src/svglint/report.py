from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

E1000_PARSE_ERROR = "E1000_PARSE_ERROR"
E1100_ACCESS_ERROR = "E1100_ACCESS_ERROR"
E2001_NOT_ROOT_ELEMENT = "E2001_NOT_ROOT_ELEMENT"
E2002_MISSING_REQUIRED_ATTRIBUTE = "E2002_MISSING_REQUIRED_ATTRIBUTE"
E2003_FORBIDDEN_ELEMENT = "E2003_FORBIDDEN_ELEMENT"
E2004_FORBIDDEN_ATTRIBUTE = "E2004_FORBIDDEN_ATTRIBUTE"
E2005_FORBIDDEN_NAMESPACED_ATTRIBUTE = "E2005_FORBIDDEN_NAMESPACED_ATTRIBUTE"


@dataclass(frozen=True)
class Violation:
    code: str
    message: str
    hint: str
    context: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        data = {"code": self.code, "message": self.message, "hint": self.hint}
        if self.context:
            data["context"] = self.context
        return data


@dataclass(frozen=True)
class FileFailure:
    path: str
    violation: Violation

    @property
    def name(self) -> str:
        return Path(self.path).name

    def diagnostic(self) -> str:
        """One output line, ``<reason> in '<base name>'``."""
        return f"{self.violation.message} in '{self.name}'"

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, **self.violation.to_dict()}


@dataclass
class LintReport:
    failures: list[FileFailure] = field(default_factory=list)
    stats: dict[str, int] = field(
        default_factory=lambda: {"files_checked": 0, "files_failed": 0, "dirs_failed": 0}
    )

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def status(self) -> str:
        return "pass" if self.ok else "fail"

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "errors": [failure.to_dict() for failure in self.failures],
            "stats": self.stats,
        }
