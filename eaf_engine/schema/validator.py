# eaf_engine/schema/validator.py
"""
Generic interpreter for the taxonomy table.

Data problems are reported as :class:`ValidationViolation` records; only a
value that is not a tree node at all raises :class:`StructuralTypeError`.
"""
from dataclasses import dataclass
from typing import List, Optional, Sequence
from loguru import logger

from ..core.interfaces import Child, Node, Tag, TEXT
from ..errors import StructuralTypeError
from .taxonomy import SCHEMA, ChildRule, ElementRule, Multiplicity


@dataclass(frozen=True)
class ValidationViolation:
    """
    One broken rule.

    Args:
        path: Location of the offending node, e.g.
            ``annotation-document/tier[2]/annotation[0]``
        rule: Short rule name such as ``missing-attribute``
        value: The offending value (attribute value, tag, or None)
        message: Human-readable explanation
    """
    path: str
    rule: str
    value: Optional[str]
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.rule}: {self.message}"


@dataclass
class ValidatorOptions:
    """
    Args:
        strict_attributes: Report attributes the taxonomy does not declare
            for a tag. Off by default; undeclared attributes are tolerated.
        require_sections: Require the header and time-order sections.
            Off by default so license-only stubs validate; either section
            may still appear at most once.
    """
    strict_attributes: bool = False
    require_sections: bool = False


def _child_tag(child: Child) -> str:
    if isinstance(child, Node):
        return child.tag
    if isinstance(child, str):
        return TEXT
    raise StructuralTypeError(f"Expected a Node or a string, got {child!r}")


class Validator:
    """Checks node trees against the EAF 3.0 taxonomy."""

    def __init__(self, options: Optional[ValidatorOptions] = None):
        self.options = options or ValidatorOptions()

    def validate(self, document: Node) -> bool:
        return not self.explain(document)

    def explain(self, document: Node) -> List[ValidationViolation]:
        """
        List every violation in ``document``.

        Args:
            document: Root node; must be an annotation-document
        Returns:
            Violations in document order (empty if the document is valid)
        Raises:
            StructuralTypeError: if ``document`` is not a Node
        """
        if not isinstance(document, Node):
            raise StructuralTypeError(f"Expected a Node, got {document!r}")
        violations: List[ValidationViolation] = []
        if document.tag != Tag.ANNOTATION_DOCUMENT.value:
            violations.append(ValidationViolation(
                document.tag, "unexpected-tag", document.tag,
                f"root must be {Tag.ANNOTATION_DOCUMENT.value}, got {document.tag}",
            ))
        self._check_node(document, document.tag, violations)
        logger.debug(f"Validation found {len(violations)} violation(s)")
        return violations

    def _check_node(self, node: Node, path: str, out: List[ValidationViolation]) -> None:
        rule = SCHEMA.get(node.tag)
        if rule is None:
            out.append(ValidationViolation(
                path, "unknown-tag", node.tag, f"{node.tag} is not an EAF 3.0 element"
            ))
            return
        self._check_attributes(node, rule, path, out)
        for child, index in self._check_content(node, rule, path, out):
            self._check_node(child, f"{path}/{child.tag}[{index}]", out)

    def _check_attributes(
        self,
        node: Node,
        rule: ElementRule,
        path: str,
        out: List[ValidationViolation]
    ) -> None:
        for name in sorted(rule.required - node.attrs.keys()):
            out.append(ValidationViolation(
                path, "missing-attribute", None, f"required attribute {name} is missing"
            ))
        for name, value in node.attrs.items():
            check = rule.values.get(name)
            if check is not None and not check(value):
                out.append(ValidationViolation(
                    path, "invalid-attribute-value", value,
                    f"{name}={value!r} must be {check.description}",
                ))
            elif self.options.strict_attributes and name not in rule.known_attributes:
                out.append(ValidationViolation(
                    path, "unknown-attribute", value, f"{name} is not allowed on {node.tag}"
                ))
        for attrs_check in rule.checks:
            failure = attrs_check(node.attrs)
            if failure is not None:
                name, message = failure
                out.append(ValidationViolation(path, name, None, message))

    def _check_content(
        self,
        node: Node,
        rule: ElementRule,
        path: str,
        out: List[ValidationViolation]
    ) -> List[tuple]:
        """
        Match children against the rule's child sequence.

        Returns:
            (child, index) pairs for the nodes that matched a slot
        """
        children: Sequence[Child] = node.children
        tags = [_child_tag(c) for c in children]
        matched = []
        pos = 0
        for slot in rule.content:
            required = slot.multiplicity in (Multiplicity.EXACTLY_ONE, Multiplicity.ONE_OR_MORE)
            if slot.section and not self.options.require_sections:
                required = False
            count = 0
            while pos < len(children) and slot.matches(tags[pos]):
                if isinstance(children[pos], Node):
                    matched.append((children[pos], pos))
                pos += 1
                count += 1
                if slot.multiplicity in (Multiplicity.EXACTLY_ONE, Multiplicity.OPTIONAL):
                    break
            if count == 0 and required:
                out.append(self._missing(slot, path, tags[pos] if pos < len(tags) else None))
        for index in range(pos, len(children)):
            out.append(ValidationViolation(
                f"{path}/{tags[index]}[{index}]", "unexpected-child", tags[index],
                f"{tags[index]} is not allowed at this position in {node.tag}",
            ))
        return matched

    def _missing(self, slot: ChildRule, path: str, found: Optional[str]) -> ValidationViolation:
        where = f"found {found}" if found else "no more children"
        return ValidationViolation(
            path, "missing-child", found,
            f"expected {slot.multiplicity.value} {slot.describe()}, {where}",
        )


_default_validator = Validator()


def validate(document: Node) -> bool:
    """True if ``document`` satisfies the EAF 3.0 taxonomy."""
    return _default_validator.validate(document)


def explain(document: Node) -> List[ValidationViolation]:
    """Every violation in ``document``; see :meth:`Validator.explain`."""
    return _default_validator.explain(document)
