"""
Durable storage for the auth token
"""

import json
from typing import Optional, Dict
from pathlib import Path
from src.config.settings import settings
from src.config.constants import AUTH_TOKEN_KEY
from src.utils.logger import logger


class TokenStore:
    """Keeps the current auth token in a JSON file"""

    def __init__(self, store_file: Optional[str] = None, key: str = AUTH_TOKEN_KEY):
        """
        Initialize token store

        Args:
            store_file: Path to storage file (optional, uses settings by default)
            key: Key the token is stored under
        """
        if store_file is None:
            store_file = settings.TOKEN_STORE_PATH
        self.store_file = Path(store_file)
        self.key = key
        self.logger = logger

    def _load(self) -> Dict[str, str]:
        """Load stored values from file"""
        if not self.store_file.exists():
            return {}
        try:
            with open(self.store_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            self.logger.warning(f"Failed to read token store {self.store_file}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: Dict[str, str]):
        """Save values to file"""
        try:
            self.store_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.store_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            self.logger.warning(f"Failed to write token store {self.store_file}: {e}")

    def get(self) -> Optional[str]:
        """Return the persisted token or None when logged out"""
        return self._load().get(self.key) or None

    def set(self, token: str):
        """Persist token"""
        data = self._load()
        data[self.key] = token
        self._save(data)
        self.logger.debug(f"Auth token persisted to {self.store_file}")

    def clear(self):
        """Remove persisted token"""
        data = self._load()
        if data.pop(self.key, None) is not None:
            self._save(data)
            self.logger.debug("Auth token removed from store")
