# eaf_engine/conversion.py
"""
Conversion between EAF XML text and node trees.
"""
import re
from dataclasses import dataclass
from typing import List, Optional
import xml.etree.ElementTree as ET
from loguru import logger

from .core.interfaces import Node, Child, Tag
from .core.naming import to_internal, to_wire
from .errors import MalformedXmlError, StructuralTypeError


XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
# Emitted for every document whatever its version, as ELAN-era tooling did
EAF_SCHEMA_LOCATION = "http://www.mpi.nl/tools/elan/EAFv2.8.xsd"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

_INTER_TAG_WHITESPACE = re.compile(r">\s+<")
_ROOT_OPEN_TAG = re.compile(r"<%s(?=[\s/>])" % to_wire(Tag.ANNOTATION_DOCUMENT.value))
_DROPPED_ATTRIBUTES = {"noNamespaceSchemaLocation"}


@dataclass
class ParserOptions:
    """
    Options for :func:`parse_document`.

    Args:
        strip_inter_tag_whitespace: Remove whitespace runs between ``>`` and
            ``<`` before parsing. This also erases whitespace-only text
            content such as ``<P>   </P>``.
    """
    strip_inter_tag_whitespace: bool = True


@dataclass
class SerializerOptions:
    """
    Options for :func:`serialize_document`.

    Args:
        xml_declaration: Prefix the output with an XML declaration
        schema_location: Value of ``xsi:noNamespaceSchemaLocation`` on the root
        xsi_namespace: Namespace bound to the ``xsi`` prefix on the root
    """
    xml_declaration: bool = True
    schema_location: str = EAF_SCHEMA_LOCATION
    xsi_namespace: str = XSI_NAMESPACE


def _local_name(name: str) -> str:
    return name.split("}")[-1] if "}" in name else name


def remove_inter_tag_whitespace(text: str) -> str:
    """
    Collapse whitespace between tags.

    This is a textual heuristic, not an XML whitespace model: it also removes
    the content of elements whose text is whitespace only.
    """
    return _INTER_TAG_WHITESPACE.sub("><", text)


def element_to_node(element: ET.Element) -> Node:
    """Convert a parsed element (and its subtree) into a node."""
    attrs = {
        to_internal(_local_name(key)): value
        for key, value in element.attrib.items()
        if _local_name(key) not in _DROPPED_ATTRIBUTES
    }
    children: List[Child] = []
    if element.text:
        children.append(element.text)
    for sub in element:
        children.append(element_to_node(sub))
        if sub.tail:
            children.append(sub.tail)
    return Node(to_internal(_local_name(element.tag)), attrs, tuple(children))


def node_to_element(node: Node) -> ET.Element:
    """Convert a node (and its subtree) into an element ready to be written."""
    if not isinstance(node, Node):
        raise StructuralTypeError(f"Expected a Node, got {node!r}")
    element = ET.Element(
        to_wire(node.tag),
        {to_wire(key): value for key, value in node.attrs.items()}
    )
    last: Optional[ET.Element] = None
    for child in node.children:
        if isinstance(child, Node):
            last = node_to_element(child)
            element.append(last)
        elif last is None:
            element.text = (element.text or "") + child
        else:
            last.tail = (last.tail or "") + child
    return element


def parse_document(text: str, options: Optional[ParserOptions] = None) -> Node:
    """
    Parse EAF XML text into a node tree.

    Args:
        text: Raw EAF file content
        options: Parser options; defaults strip whitespace between tags
    Returns:
        Root node of the document
    Raises:
        MalformedXmlError: if the XML parser rejects the text
        StructuralTypeError: if ``text`` is not a string
    """
    if not isinstance(text, str):
        raise StructuralTypeError(
            f"EAF XML must be given as str, got {type(text).__name__}; decode bytes first"
        )
    options = options or ParserOptions()
    if options.strip_inter_tag_whitespace:
        text = remove_inter_tag_whitespace(text)
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        logger.error(f"Failed to parse EAF XML: {e}")
        raise MalformedXmlError(str(e), getattr(e, "position", None)) from e
    return element_to_node(root)


def serialize_document(document: Node, options: Optional[SerializerOptions] = None) -> str:
    """
    Serialize a node tree to EAF XML text, without indentation.

    The root opening tag receives the ``xmlns:xsi`` declaration and the
    ``xsi:noNamespaceSchemaLocation`` attribute from ``options``.
    """
    options = options or SerializerOptions()
    body = ET.tostring(node_to_element(document), encoding="unicode")
    # raw carriage returns only occur in text; the parser would normalise them
    body = body.replace("\r", "&#13;")
    body = _ROOT_OPEN_TAG.sub(
        lambda m: (
            f'{m.group(0)} xmlns:xsi="{options.xsi_namespace}" '
            f'xsi:noNamespaceSchemaLocation="{options.schema_location}"'
        ),
        body,
        count=1,
    )
    if options.xml_declaration:
        return XML_DECLARATION + body
    return body
