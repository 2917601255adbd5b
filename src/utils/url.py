from urllib.parse import urljoin, urlparse


def normalize_domain(domain: str) -> str:
    """Strip a leading www. so example.com and www.example.com share storage."""
    return domain.removeprefix("www.")


def extract_domain(url: str) -> str:
    """Extract the normalized hostname from a URL."""
    parsed = urlparse(url)
    host = parsed.hostname or parsed.path.split("/")[0]
    return normalize_domain(host.lower())


def resolve_url(reference: str, base_url: str) -> str:
    """Resolve a possibly relative link against the URL of the page it appeared on."""
    return urljoin(base_url, reference)
