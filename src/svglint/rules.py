from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Iterable, Union

import yaml

from .svg_checks import normalize_extensions

INKSCAPE_NS = "http://www.inkscape.org/namespaces/inkscape"


class RulesError(ValueError):
    """Raised when a rules file cannot be read or has the wrong shape."""


@dataclass(frozen=True)
class NamespacedAttribute:
    namespace: str
    name: str

    def __str__(self) -> str:
        return f"{self.namespace}:{self.name}"


ForbiddenAttribute = Union[str, NamespacedAttribute]


@dataclass(frozen=True)
class RuleSet:
    root_tag: str
    required_root_attributes: tuple[str, ...]
    forbidden_attributes: tuple[ForbiddenAttribute, ...]
    forbidden_tags: tuple[str, ...]
    extensions: tuple[str, ...]
    ignore_dirs: tuple[str, ...]

    def with_walk_options(
        self,
        extensions: Iterable[str] | None = None,
        ignore_dirs: Iterable[str] | None = None,
    ) -> RuleSet:
        rules = self
        if extensions is not None:
            rules = replace(rules, extensions=normalize_extensions(extensions))
        if ignore_dirs is not None:
            rules = replace(rules, ignore_dirs=tuple(ignore_dirs))
        return rules


DEFAULT_EXTENSIONS: tuple[str, ...] = ("svg",)
DEFAULT_IGNORE_DIRS: tuple[str, ...] = (".git", "node_modules")

DEFAULT_RULES = RuleSet(
    root_tag="svg",
    required_root_attributes=("viewBox",),
    forbidden_attributes=("style", NamespacedAttribute(INKSCAPE_NS, "version")),
    forbidden_tags=("image",),
    extensions=DEFAULT_EXTENSIONS,
    ignore_dirs=DEFAULT_IGNORE_DIRS,
)


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text())
    except OSError as exc:
        raise RulesError(f"Cannot read rules file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise RulesError(f"Invalid YAML in rules file {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RulesError(f"Expected mapping at top of YAML: {path}")
    return data


def _string_list(section: dict[str, Any], key: str, default: tuple[str, ...]) -> tuple[str, ...]:
    if key not in section or section[key] is None:
        return default
    raw = section[key]
    if isinstance(raw, str) or not isinstance(raw, list):
        raise RulesError(f"'{key}' must be a list of strings")
    if not all(isinstance(item, str) and item for item in raw):
        raise RulesError(f"'{key}' must only contain non-empty strings")
    return tuple(raw)


def _forbidden_attribute(entry: Any) -> ForbiddenAttribute:
    if isinstance(entry, str) and entry:
        return entry
    if isinstance(entry, dict):
        namespace = entry.get("namespace")
        name = entry.get("name")
        if isinstance(namespace, str) and namespace and isinstance(name, str) and name:
            return NamespacedAttribute(namespace, name)
    raise RulesError(
        f"Invalid forbidden attribute entry {entry!r}; "
        "expected a name or a {namespace, name} mapping"
    )


def parse_rules(data: dict[str, Any], base: RuleSet = DEFAULT_RULES) -> RuleSet:
    svg = data.get("svg", {}) or {}
    walk = data.get("walk", {}) or {}
    if not isinstance(svg, dict) or not isinstance(walk, dict):
        raise RulesError("'svg' and 'walk' sections must be mappings")

    root_tag = svg.get("root_tag", base.root_tag)
    if not isinstance(root_tag, str) or not root_tag:
        raise RulesError("'root_tag' must be a non-empty string")

    if svg.get("forbid_attributes") is None:
        forbidden_attributes = base.forbidden_attributes
    elif isinstance(svg["forbid_attributes"], list):
        forbidden_attributes = tuple(
            _forbidden_attribute(entry) for entry in svg["forbid_attributes"]
        )
    else:
        raise RulesError("'forbid_attributes' must be a list")

    return RuleSet(
        root_tag=root_tag,
        required_root_attributes=_string_list(
            svg, "required_root_attributes", base.required_root_attributes
        ),
        forbidden_attributes=forbidden_attributes,
        forbidden_tags=_string_list(svg, "forbid_elements", base.forbidden_tags),
        extensions=normalize_extensions(_string_list(walk, "extensions", base.extensions)),
        ignore_dirs=_string_list(walk, "ignore_dirs", base.ignore_dirs),
    )


def load_rules(path: Path | str | None = None) -> RuleSet:
    if path is None:
        return DEFAULT_RULES
    return parse_rules(_load_yaml(Path(path)))
