"""
Message Catalog for the RPS game server

Handles loading and validation of the YAML file holding the user-facing
messages attached to protocol events and error responses.
"""

import logging
import os
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_MESSAGES_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'messages.yaml')

REQUIRED_KEYS = frozenset({
    'opponent_left',
    'invalid_room_id',
    'room_not_found',
    'room_full',
    'room_in_use',
    'invalid_choice',
    'need_two_players',
    'not_player1',
    'not_player2',
    'opponent_not_in_room',
    'already_chosen',
})


class MessageCatalogError(Exception):
    """Raised when the message catalog is structurally invalid."""
    pass


class MessageCatalog:
    """Lookup of user-facing messages by key, backed by a YAML file."""

    def __init__(self, yaml_file_path: Optional[str] = None):
        """
        Initialize MessageCatalog with path to YAML file.

        Args:
            yaml_file_path: Path to the messages file. Relative paths are
                resolved against this package. Defaults to the bundled file.
        """
        if yaml_file_path and not os.path.isabs(yaml_file_path):
            yaml_file_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), yaml_file_path)
        self.yaml_file_path = yaml_file_path or DEFAULT_MESSAGES_FILE
        self._messages: Dict[str, str] = {}
        self._loaded = False

    def load(self) -> None:
        """
        Load messages from the YAML file.

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            MessageCatalogError: If YAML structure is invalid
            yaml.YAMLError: If YAML parsing fails
        """
        try:
            with open(self.yaml_file_path, 'r', encoding='utf-8') as file:
                data = yaml.safe_load(file)

            self.validate_yaml_structure(data)
            self._messages = {key: str(value) for key, value in data['messages'].items()}
            self._loaded = True
            logger.info(f"Loaded {len(self._messages)} messages from {self.yaml_file_path}")

        except FileNotFoundError:
            logger.error(f"Messages file not found: {self.yaml_file_path}")
            raise
        except yaml.YAMLError as e:
            logger.error(f"YAML parsing error: {e}")
            raise
        except MessageCatalogError as e:
            logger.error(f"Message catalog validation error: {e}")
            raise

    def validate_yaml_structure(self, data: Any) -> None:
        """
        Validate the structure of loaded YAML data.

        Raises:
            MessageCatalogError: If structure is invalid
        """
        if not isinstance(data, dict):
            raise MessageCatalogError("YAML root must be a dictionary")

        if 'messages' not in data:
            raise MessageCatalogError("YAML must contain 'messages' key")

        messages = data['messages']
        if not isinstance(messages, dict):
            raise MessageCatalogError("'messages' must be a dictionary")

        missing = REQUIRED_KEYS - set(messages.keys())
        if missing:
            raise MessageCatalogError(f"Missing required messages: {sorted(missing)}")

        for key, value in messages.items():
            if not isinstance(value, str) or not value.strip():
                raise MessageCatalogError(f"Message '{key}' must be a non-empty string")

    def is_loaded(self) -> bool:
        return self._loaded

    def get(self, key: str) -> str:
        """Get a message, loading the catalog on first use."""
        if not self._loaded:
            self.load()
        try:
            return self._messages[key]
        except KeyError:
            raise KeyError(f"Unknown message key: {key}")

    def count(self) -> int:
        return len(self._messages)
