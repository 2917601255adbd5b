class ScrapeError(Exception):
    """Base exception for scraping errors."""

    def __init__(self, message: str, domain: str = "", url: str = ""):
        self.domain = domain
        self.url = url
        super().__init__(message)


class TemplateValidationError(ScrapeError):
    """Raised when a template is malformed. Always raised before any navigation."""

    def __init__(self, message: str, template: str = "", **kwargs: str):
        self.template = template
        super().__init__(message, **kwargs)


class NavigationError(ScrapeError):
    """Raised when the renderer cannot load a page. Never retried."""

    def __init__(self, message: str, status_code: int = 0, **kwargs: str):
        self.status_code = status_code
        super().__init__(message, **kwargs)


class ExtractionError(ScrapeError):
    """Raised by the DOM adapter for selectors it cannot evaluate."""


class StorageError(ScrapeError):
    """Raised when scraped data or domain configs cannot be persisted."""
