"""Generic XML -> nested dict conversion, independent of feed format.

Shape of the result:
    <rss version="2.0"><channel><title>T</title></channel></rss>
    -> {"rss": {"@_version": "2.0", "channel": {"title": "T"}}}

Repeated child tags collapse into a list, attributes live under "@_<name>",
and text of an element that also has attributes or children lives under "#text".
"""

from __future__ import annotations

import re
from typing import Any, Dict, Optional, Union

from lxml import etree

from feedcore.core.config import FeedOptions
from feedcore.core.errors import ParseError
from feedcore.core.logging import get_logger

log = get_logger("ingestion.xml_tree")

ATTR_PREFIX = "@_"
TEXT_KEY = "#text"

_XML_NS = "http://www.w3.org/XML/1998/namespace"
_INT_RE = re.compile(r"(0|-?[1-9][0-9]*)")
_FLOAT_RE = re.compile(r"-?(0|[1-9][0-9]*)\.[0-9]+")


def _xml_parser(encoding: Optional[str]) -> etree.XMLParser:
    return etree.XMLParser(
        encoding=encoding,
        resolve_entities="internal",
        no_network=True,
        remove_comments=True,
        remove_pis=True,
        strip_cdata=True,
        recover=False,
    )


def _qualified(tag: str, nsmap: Dict[Optional[str], str]) -> str:
    """'{uri}local' -> 'prefix:local', or 'local' for the default namespace."""
    qname = etree.QName(tag)
    if not qname.namespace:
        return qname.localname
    if qname.namespace == _XML_NS:
        return f"xml:{qname.localname}"
    for prefix, uri in nsmap.items():
        if uri == qname.namespace and prefix:
            return f"{prefix}:{qname.localname}"
    return qname.localname


def _scalar(text: str, options: FeedOptions) -> Union[str, int, float]:
    if options.trim_values:
        text = text.strip()
    if not options.parse_tag_values:
        return text
    # Only convert when the number prints back identically: "0042", "1e3"
    # and "1.50" stay strings.
    if _INT_RE.fullmatch(text) and len(text) <= 64:
        return int(text)
    if _FLOAT_RE.fullmatch(text) and repr(float(text)) == text:
        return float(text)
    return text


def _element_text(el: etree._Element) -> str:
    parts = [el.text or ""]
    for child in el:
        parts.append(child.tail or "")
    return "".join(parts)


def _convert(el: etree._Element, options: FeedOptions) -> Any:
    node: Dict[str, Any] = {}

    for name, value in el.attrib.items():
        node[ATTR_PREFIX + _qualified(name, el.nsmap)] = _scalar(value, options)

    for child in el:
        if not isinstance(child.tag, str):
            continue
        key = _qualified(child.tag, child.nsmap)
        value = _convert(child, options)
        if key not in node:
            node[key] = value
        elif isinstance(node[key], list):
            node[key].append(value)
        else:
            node[key] = [node[key], value]

    text = _scalar(_element_text(el), options)
    if not node:
        return text
    if text != "":
        node[TEXT_KEY] = text
    return node


def parse_xml(text: Union[str, bytes], options: Optional[FeedOptions] = None) -> Dict[str, Any]:
    """Parse well-formed XML into the generic tree. Raises ParseError otherwise."""
    options = options or FeedOptions()
    # Decoded text overrides whatever encoding the XML declaration names
    encoding = "utf-8" if isinstance(text, str) else None
    data = text.encode("utf-8") if isinstance(text, str) else text
    if not data.strip():
        raise ParseError("Empty XML document")

    try:
        root = etree.fromstring(data, parser=_xml_parser(encoding))
    except etree.XMLSyntaxError as exc:
        log.warning(f"Malformed XML: {exc}")
        raise ParseError(f"Malformed XML: {exc}") from exc

    return {_qualified(root.tag, root.nsmap): _convert(root, options)}
