import json
from pathlib import Path
from typing import Any

from src.config.constants import CONFIGS_FILENAME
from src.utils.errors import StorageError
from src.utils.url import normalize_domain


class ConfigStore:
    """Per-domain template sets, persisted as one JSON document."""

    def __init__(self, storage_dir: str | Path):
        self.path = Path(storage_dir) / CONFIGS_FILENAME

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> dict[str, Any]:
        if not self.exists():
            return {}
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to read {self.path}: {e}") from e

    def save(self, domain: str, templates: dict[str, Any]) -> str:
        """Store templates for a domain, replacing any previous set. Returns the normalized domain."""
        normalized = normalize_domain(domain)
        configs = self.load()
        configs[normalized] = {"templates": templates}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(configs, indent=2), encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to write {self.path}: {e}", domain=normalized) from e
        return normalized

    def get(self, domain: str) -> dict[str, Any] | None:
        entry = self.load().get(normalize_domain(domain))
        if not entry or not entry.get("templates"):
            return None
        return entry["templates"]

    def domains(self) -> list[str]:
        return list(self.load())
