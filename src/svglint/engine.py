from __future__ import annotations

import xml.etree.ElementTree as ET

from .report import (
    E2001_NOT_ROOT_ELEMENT,
    E2002_MISSING_REQUIRED_ATTRIBUTE,
    E2003_FORBIDDEN_ELEMENT,
    E2004_FORBIDDEN_ATTRIBUTE,
    E2005_FORBIDDEN_NAMESPACED_ATTRIBUTE,
    Violation,
)
from .rules import DEFAULT_RULES, NamespacedAttribute, RuleSet
from .svg_checks import local_name, namespace_of, qualified_name
from .xml_utils import element_context


def _root_element(doc: ET.ElementTree | ET.Element) -> ET.Element:
    if isinstance(doc, ET.ElementTree):
        return doc.getroot()
    return doc


def _check_root_tag(root: ET.Element, rules: RuleSet) -> Violation | None:
    if local_name(root.tag) == rules.root_tag:
        return None
    return Violation(
        code=E2001_NOT_ROOT_ELEMENT,
        message="Not a valid SVG",
        hint=f"The document element must be <{rules.root_tag}>.",
        context={"tag": local_name(root.tag), "namespace": namespace_of(root.tag)},
    )


def _check_required_attributes(root: ET.Element, rules: RuleSet) -> Violation | None:
    for attr in rules.required_root_attributes:
        if attr not in root.attrib:
            return Violation(
                code=E2002_MISSING_REQUIRED_ATTRIBUTE,
                message=f"Missing '{attr}' attribute",
                hint=f"Add a {attr} attribute to the root <{rules.root_tag}> element.",
                context={"attribute": attr, **element_context(root)},
            )
    return None


def validate_element(el: ET.Element, rules: RuleSet = DEFAULT_RULES) -> Violation | None:
    """Check one element against the forbidden tag and attribute tables.

    The tag check runs before any attribute check, and attributes are checked
    in table order. The first match is returned; ``None`` means valid.
    """
    tag = local_name(el.tag)
    if tag in rules.forbidden_tags:
        return Violation(
            code=E2003_FORBIDDEN_ELEMENT,
            message=f"Invalid element <{tag}>",
            hint="Remove the element and replace it with vector primitives.",
            context=element_context(el),
        )
    for attr in rules.forbidden_attributes:
        if isinstance(attr, NamespacedAttribute):
            if qualified_name(attr.namespace, attr.name) in el.attrib:
                return Violation(
                    code=E2005_FORBIDDEN_NAMESPACED_ATTRIBUTE,
                    message=f"<{tag}> has invalid attribute, '{attr}'",
                    hint="Strip editor-specific metadata before committing the file.",
                    context={
                        "attribute": attr.name,
                        "namespace": attr.namespace,
                        **element_context(el),
                    },
                )
        elif attr in el.attrib:
            return Violation(
                code=E2004_FORBIDDEN_ATTRIBUTE,
                message=f"<{tag}> has invalid attribute, '{attr}'",
                hint=f"Remove the {attr} attribute; use presentation attributes instead.",
                context={"attribute": attr, **element_context(el)},
            )
    return None


def validate_document(
    doc: ET.ElementTree | ET.Element, rules: RuleSet = DEFAULT_RULES
) -> Violation | None:
    """Validate a parsed SVG document and return its first violation.

    Checks run in a fixed order and stop at the first failure: the root tag,
    then the required root attributes in declared order, then every element
    (root included) in document order.
    """
    root = _root_element(doc)
    violation = _check_root_tag(root, rules)
    if violation is not None:
        return violation
    violation = _check_required_attributes(root, rules)
    if violation is not None:
        return violation
    for node in root.iter():
        violation = validate_element(node, rules)
        if violation is not None:
            return violation
    return None
