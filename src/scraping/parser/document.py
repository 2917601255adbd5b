from selectolax.parser import HTMLParser, Node

from src.utils.errors import ExtractionError


class HtmlDocument:
    """Queryable snapshot of one rendered page, backed by selectolax.

    The renderer hands the engine one of these per navigation. All extraction logic
    runs against this adapter, never against the live page.
    """

    def __init__(self, html: str, url: str):
        self.tree = HTMLParser(html)
        self.url = url

    @property
    def root(self) -> Node | None:
        return self.tree.root

    def query_one(self, node: Node, selector: str, include_self: bool = False) -> Node | None:
        """First descendant of node matching a CSS selector."""
        matches = self.query_all(node, selector, include_self)
        return matches[0] if matches else None

    def query_all(self, node: Node, selector: str, include_self: bool = False) -> list[Node]:
        """All descendants of node matching a CSS selector, in document order.

        The selector is matched against the whole document, so compound selectors may
        name ancestors of node; only matches below node are kept.
        """
        try:
            matches = self.tree.css(selector)
        except Exception as e:
            raise ExtractionError(f"Invalid CSS selector {selector!r}: {e}", url=self.url) from e
        return [
            match
            for match in matches
            if (include_self and match.mem_id == node.mem_id) or self.is_descendant(match, node)
        ]

    def elements(self, node: Node, include_self: bool = False) -> list[Node]:
        """Every element below node, depth-first. node itself only with include_self."""
        below = [el for el in node.css("*") if el.mem_id != node.mem_id]
        return [node, *below] if include_self else below

    def is_descendant(self, node: Node, ancestor: Node) -> bool:
        parent = node.parent
        while parent is not None:
            if parent.mem_id == ancestor.mem_id:
                return True
            parent = parent.parent
        return False

    def all_elements(self) -> list[Node]:
        root = self.root
        if root is None:
            return []
        return self.elements(root, include_self=True)

    def by_class(self, class_names: list[str], node: Node | None = None) -> list[Node]:
        """Elements carrying every given class, below node or across the whole document."""
        candidates = self.all_elements() if node is None else self.elements(node)
        wanted = set(class_names)
        return [el for el in candidates if wanted <= set(self.classes_of(el))]

    def by_id(self, element_id: str, node: Node, include_self: bool = False) -> Node | None:
        for el in self.elements(node, include_self):
            if el.attributes.get("id") == element_id:
                return el
        return None

    def classes_of(self, node: Node) -> list[str]:
        return (node.attributes.get("class") or "").split()

    def text_of(self, node: Node) -> str:
        """Trimmed text content of node and all its descendants."""
        return (node.text(deep=True) or "").strip()

    def attr_of(self, node: Node, name: str) -> str | None:
        if name not in node.attributes:
            return None
        # Boolean attributes parse to None; the DOM reports them as ""
        return node.attributes[name] or ""
