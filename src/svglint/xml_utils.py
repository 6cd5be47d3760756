from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from .svg_checks import local_name


def parse_svg(svg_path: Path | str) -> ET.ElementTree:
    with open(svg_path, "rb") as handle:
        return ET.parse(handle)


def element_context(node: ET.Element) -> dict[str, str]:
    context: dict[str, str] = {"tag": local_name(node.tag)}
    node_id = node.get("id")
    if node_id:
        context["id"] = node_id
    return context
