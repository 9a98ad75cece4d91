"""Exceptions raised by the cursor theme tools."""

from pathlib import Path


class CursorError(Exception):
    """Base class for every error the tools report to the user."""


class ThemeNotFound(CursorError):
    def __init__(self, path):
        self.path = Path(path)
        super().__init__(f"Theme directory not found: {self.path}")


class CursorNotFound(CursorError):
    def __init__(self, path):
        self.path = Path(path)
        super().__init__(f"Cursor file not found: {self.path}")


class ManifestNotFound(CursorError):
    def __init__(self, path):
        self.path = Path(path)
        super().__init__(f"Manifest file not found: {self.path}")


class CommandFailed(CursorError):
    def __init__(self, command: str, error: str):
        self.command = command
        self.error = error
        super().__init__(f"Command failed: {command} - {error}")


class ConfigError(CursorError):
    pass
