import re
from enum import StrEnum

import structlog
from selectolax.parser import Node

from src.models.template import Method
from src.scraping.parser.document import HtmlDocument

log = structlog.get_logger()


class Mode(StrEnum):
    SINGLE = "single"
    COLLECTION = "collection"


def resolve(
    document: HtmlDocument,
    root: Node,
    selector: str,
    method: Method,
    mode: Mode,
    *,
    tag: str | None = None,
    include_root: bool = False,
) -> list[Node]:
    """Resolve a (selector, method) pair under root.

    Returns at most one node in SINGLE mode and every match, in document order, in
    COLLECTION mode. Never raises: malformed selectors and invalid patterns resolve
    to no match.

    CLASS_NAME collections are document-scoped rather than root-scoped; single
    lookups stay below root. ``tag`` restricts REGEX candidates to one element name.
    ``include_root`` lets root itself match, for lookups scoped to the whole document.
    """
    try:
        nodes = _dispatch(document, root, selector, method, mode, tag, include_root)
    except Exception as e:
        log.warning("selector_unresolvable", selector=selector, method=str(method), error=str(e))
        return []
    return nodes[:1] if mode is Mode.SINGLE else nodes


def resolve_one(document: HtmlDocument, root: Node, selector: str, method: Method, **kwargs) -> Node | None:
    nodes = resolve(document, root, selector, method, Mode.SINGLE, **kwargs)
    return nodes[0] if nodes else None


def _dispatch(
    document: HtmlDocument,
    root: Node,
    selector: str,
    method: Method,
    mode: Mode,
    tag: str | None,
    include_root: bool,
) -> list[Node]:
    match method:
        case Method.CSS:
            if mode is Mode.SINGLE:
                node = document.query_one(root, selector, include_root)
                return [node] if node is not None else []
            return document.query_all(root, selector, include_root)
        case Method.CLASS_NAME:
            class_names = selector.removeprefix(".").split()
            if not class_names:
                return []
            scope = None if mode is Mode.COLLECTION else root
            return document.by_class(class_names, scope)
        case Method.ID:
            element_id = selector.removeprefix("#")
            if not element_id:
                return []
            node = document.by_id(element_id, root, include_root)
            return [node] if node is not None else []
        case Method.REGEX:
            pattern = re.compile(selector, re.IGNORECASE)
            return [
                el
                for el in document.elements(root, include_root)
                if (tag is None or el.tag == tag) and pattern.search(document.text_of(el))
            ]
