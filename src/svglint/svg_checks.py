from __future__ import annotations

from typing import Iterable


def local_name(tag: str) -> str:
    if "}" in tag:
        return tag.split("}", 1)[1]
    return tag


def namespace_of(tag: str) -> str | None:
    if tag.startswith("{") and "}" in tag:
        return tag[1:].split("}", 1)[0]
    return None


def qualified_name(namespace: str, name: str) -> str:
    """Clark notation used by ElementTree for namespaced tags and attributes."""
    return f"{{{namespace}}}{name}"


def normalize_extension(ext: str) -> str:
    return ext.strip().lstrip(".").lower()


def normalize_extensions(exts: Iterable[str]) -> tuple[str, ...]:
    normalized: list[str] = []
    for ext in exts:
        value = normalize_extension(ext)
        if value and value not in normalized:
            normalized.append(value)
    return tuple(normalized)
