"""
Tests for config.py - environment parsing helpers.
"""

import sys
import os

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import env_int, env_list, env_str


class TestEnvHelpers:
    """Tests for the typed environment getters."""

    def test_int_default_when_unset(self, monkeypatch):
        monkeypatch.delenv("SNAKE_TEST_INT", raising=False)
        assert env_int("SNAKE_TEST_INT", 7) == 7

    def test_int_parsed(self, monkeypatch):
        monkeypatch.setenv("SNAKE_TEST_INT", " 42 ")
        assert env_int("SNAKE_TEST_INT", 7) == 42

    def test_invalid_int_falls_back_with_warning(self, monkeypatch, caplog):
        monkeypatch.setenv("SNAKE_TEST_INT", "fast")
        assert env_int("SNAKE_TEST_INT", 7) == 7
        assert "SNAKE_TEST_INT" in caplog.text

    def test_quoted_string(self, monkeypatch):
        monkeypatch.setenv("SNAKE_TEST_STR", '"#00FF00"')
        assert env_str("SNAKE_TEST_STR", "#FF0000") == "#00FF00"

    def test_empty_string_uses_default(self, monkeypatch):
        monkeypatch.setenv("SNAKE_TEST_STR", "")
        assert env_str("SNAKE_TEST_STR", "silly") == "silly"

    def test_list(self, monkeypatch):
        monkeypatch.setenv("SNAKE_TEST_LIST", "http://a, http://b,,")
        assert env_list("SNAKE_TEST_LIST", []) == ["http://a", "http://b"]
