"""Persistence of the required dependency list."""
import json
from pathlib import Path
from typing import Iterable, List

from git_deps_keeper.exceptions import ManifestError
from git_deps_keeper.logging_config import get_logger

logger = get_logger(__name__)


class ManifestService:
    """Loads and saves the ``{"urls": [...]}`` manifest as a whole."""

    def __init__(self, manifest_path: str):
        """Initialize manifest service.

        Args:
            manifest_path: Location of the JSON manifest file
        """
        self.manifest_path = Path(manifest_path)

    def load_urls(self) -> List[str]:
        """Read the URL list; a missing or unreadable manifest is empty."""
        if not self.manifest_path.exists():
            return []

        try:
            content = self.manifest_path.read_text(encoding="utf-8")
            if not content.strip():
                return []
            data = json.loads(content)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read manifest {self.manifest_path}: {e}")
            return []

        if not isinstance(data, dict) or not isinstance(data.get("urls"), list):
            logger.warning(f"Manifest {self.manifest_path} has no 'urls' list")
            return []

        return [url for url in data["urls"] if isinstance(url, str)]

    def save_urls(self, urls: Iterable[str]) -> None:
        """Write the URL list, dropping duplicates but keeping order."""
        unique = list(dict.fromkeys(urls or []))
        try:
            self.manifest_path.parent.mkdir(parents=True, exist_ok=True)
            self.manifest_path.write_text(json.dumps({"urls": unique}, indent=4) + "\n", encoding="utf-8")
        except OSError as e:
            raise ManifestError(str(self.manifest_path), str(e)) from e
        logger.debug(f"Saved {len(unique)} URLs to {self.manifest_path}")

    def add_url(self, url: str) -> bool:
        """Append url unless blank or already listed."""
        if not url or not url.strip():
            return False
        urls = self.load_urls()
        if url in urls:
            return False
        urls.append(url)
        self.save_urls(urls)
        return True

    def remove_url(self, url: str) -> bool:
        urls = self.load_urls()
        if url not in urls:
            return False
        self.save_urls(u for u in urls if u != url)
        return True
