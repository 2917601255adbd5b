import structlog
from selectolax.parser import Node

from src.models.scraping import Record
from src.models.template import FieldKind, FieldSpec, Template
from src.scraping.parser.document import HtmlDocument
from src.scraping.parser.selector_resolver import Mode, resolve, resolve_one

log = structlog.get_logger()


def extract_field(document: HtmlDocument, item: Node, spec: FieldSpec) -> str:
    """Extract one field value from an item node. Any failure yields ""."""
    try:
        node = resolve_one(document, item, spec.selector, spec.method)
        if node is None:
            return ""
        if spec.kind is FieldKind.ATTRIBUTE:
            return document.attr_of(node, spec.attribute or "") or ""
        return document.text_of(node)
    except Exception as e:
        log.warning(
            "field_extraction_failed",
            selector=spec.selector,
            method=str(spec.method),
            kind=str(spec.kind),
            error=str(e),
        )
        return ""


def extract_record(document: HtmlDocument, item: Node, template: Template) -> Record:
    """Build one record with exactly the template's fields, in declared order."""
    return {name: extract_field(document, item, spec) for name, spec in template.fields.items()}


def find_items(document: HtmlDocument, template: Template) -> list[Node]:
    root = document.root
    if root is None:
        return []
    return resolve(document, root, template.item_selector, template.item_method, Mode.COLLECTION, include_root=True)


def extract_page(document: HtmlDocument, template: Template) -> list[Record]:
    """Extract one record per item node, in document order of the items."""
    items = find_items(document, template)
    if not items:
        log.warning(
            "no_items_found",
            url=document.url,
            selector=template.item_selector,
            method=str(template.item_method),
        )
    return [extract_record(document, item, template) for item in items]
