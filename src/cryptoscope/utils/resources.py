"""
Resource Loader
Reads challenge data files (ciphertext dumps, line lists) by name
"""

import os
from pathlib import Path
from typing import List, Optional, Union

RESOURCES_ENV = "CRYPTOSCOPE_RESOURCES"
DEFAULT_RESOURCES_DIR = Path.home() / "Cryptopals" / "Resources"


class ResourceLoader:
    """
    Loads text resources from a base directory

    Missing or unreadable files are reported as None rather than raised,
    so callers can skip optional fixtures.
    """

    def __init__(self, base_dir: Optional[Union[str, Path]] = None):
        """
        Args:
            base_dir: Directory holding resources. Defaults to $CRYPTOSCOPE_RESOURCES,
                then ~/Cryptopals/Resources
        """
        if base_dir is None:
            base_dir = os.environ.get(RESOURCES_ENV) or DEFAULT_RESOURCES_DIR
        self.base_dir = Path(base_dir).expanduser()

    def path(self, name: str) -> Path:
        return self.base_dir / name

    def contents(self, name: str) -> Optional[str]:
        """File contents as text, or None if the file can't be read"""
        try:
            return self.path(name).read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError):
            return None

    def lines(self, name: str) -> Optional[List[str]]:
        """Non-empty stripped lines of a resource, or None if missing"""
        content = self.contents(name)
        if content is None:
            return None
        return [line.strip() for line in content.splitlines() if line.strip()]
