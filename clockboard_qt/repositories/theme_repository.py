# clockboard_qt/repositories/theme_repository.py
"""
Repository for theme documents (flat JSON objects)
No resolution happens here: a saved theme may name fonts or colors that
later fail to resolve.
"""

import json
from pathlib import Path
from typing import List, Optional
import logging

from ..models.theme_data import ThemeData
from ..utils.constants import THEMES_DIR
from ..utils.errors import DocumentIOError, DocumentParseError

logger = logging.getLogger(__name__)


class ThemeRepository:
    """Load / save ThemeData and list the themes folder"""

    def __init__(self, theme_dir: Optional[str] = None):
        self.theme_dir = Path(theme_dir) if theme_dir else THEMES_DIR

    def load(self, path) -> ThemeData:
        """
        Read a theme document

        Raises:
            DocumentIOError: file missing or unreadable
            DocumentParseError: malformed JSON or wrong value types
        """
        path = Path(path)
        try:
            text = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentIOError(path, e) from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise DocumentParseError(f"{path}: {e}") from e

        theme = ThemeData.from_dict(data)
        logger.info(f"Loaded theme '{theme.name}' from {path}")
        return theme

    def save(self, theme: ThemeData, path):
        """
        Write a theme document

        Raises:
            DocumentIOError: file cannot be written
        """
        path = Path(path)
        try:
            path.write_text(json.dumps(theme.to_dict(), indent=2, ensure_ascii=False),
                            encoding='utf-8')
        except OSError as e:
            raise DocumentIOError(path, e) from e

        logger.info(f"Saved theme '{theme.name}' to {path}")

    def list_themes(self) -> List[Path]:
        """Theme files in the themes folder, sorted by name"""
        if not self.theme_dir.is_dir():
            return []
        return sorted(self.theme_dir.glob("*.json"))

    def path_for(self, name: str) -> Path:
        return self.theme_dir / f"{name}.json"
