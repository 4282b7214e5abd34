"""
Unit tests for MessageCatalog.
"""

import os

import pytest
import yaml

from rps.message_catalog import DEFAULT_MESSAGES_FILE, REQUIRED_KEYS, MessageCatalog, MessageCatalogError


def write_catalog(path, messages):
    path.write_text(yaml.safe_dump({"messages": messages}), encoding="utf-8")
    return str(path)


def full_messages():
    return {key: f"text for {key}" for key in REQUIRED_KEYS}


class TestMessageCatalog:
    """Test cases for MessageCatalog."""

    def test_bundled_catalog_is_complete(self):
        catalog = MessageCatalog()
        catalog.load()

        assert catalog.is_loaded()
        assert catalog.yaml_file_path == DEFAULT_MESSAGES_FILE
        assert catalog.count() >= len(REQUIRED_KEYS)
        assert catalog.get("opponent_left")

    def test_get_loads_lazily(self):
        catalog = MessageCatalog()

        assert not catalog.is_loaded()
        assert catalog.get("room_full")
        assert catalog.is_loaded()

    def test_unknown_key(self):
        catalog = MessageCatalog()

        with pytest.raises(KeyError):
            catalog.get("no_such_message")

    def test_relative_path_resolves_against_package(self):
        catalog = MessageCatalog("messages.yaml")

        assert catalog.yaml_file_path == DEFAULT_MESSAGES_FILE

    def test_custom_file(self, tmp_path):
        messages = full_messages()
        messages["opponent_left"] = "Bye"
        catalog = MessageCatalog(write_catalog(tmp_path / "messages.yaml", messages))

        catalog.load()

        assert catalog.get("opponent_left") == "Bye"

    def test_missing_file(self, tmp_path):
        catalog = MessageCatalog(os.path.join(str(tmp_path), "missing.yaml"))

        with pytest.raises(FileNotFoundError):
            catalog.load()

    def test_missing_required_key(self, tmp_path):
        messages = full_messages()
        del messages["room_full"]
        catalog = MessageCatalog(write_catalog(tmp_path / "messages.yaml", messages))

        with pytest.raises(MessageCatalogError, match="room_full"):
            catalog.load()

        assert not catalog.is_loaded()

    def test_empty_message(self, tmp_path):
        messages = full_messages()
        messages["room_full"] = "  "
        catalog = MessageCatalog(write_catalog(tmp_path / "messages.yaml", messages))

        with pytest.raises(MessageCatalogError):
            catalog.load()

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "messages.yaml"
        path.write_text("messages: [unclosed", encoding="utf-8")

        with pytest.raises(yaml.YAMLError):
            MessageCatalog(str(path)).load()

    @pytest.mark.parametrize("data", [None, [], {"other": {}}, {"messages": ["a", "b"]}])
    def test_validate_structure(self, data):
        with pytest.raises(MessageCatalogError):
            MessageCatalog().validate_yaml_structure(data)
