USER_AGENTS: list[str] = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/115.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 13_4_1) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/115.0.5790.171 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/115.0.0.0 Safari/537.36",
]

# Resource types the browser tab never downloads
BLOCKED_RESOURCE_TYPES: frozenset[str] = frozenset({"image", "stylesheet", "font", "media"})

DEFAULT_MIN_DELAY_MS = 2000
DEFAULT_MAX_DELAY_MS = 5000

CONFIGS_FILENAME = "configs.json"
NO_TEMPLATE_DIR = "_no_template_"
