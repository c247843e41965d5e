"""
Setting domain entity.

A single key/value row of the settings table.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class SettingEntry:
    """Settings table row."""

    key: str
    value: str
    load_on_startup: bool = False

    def __post_init__(self):
        """Validate setting entry."""
        if not self.key:
            raise ValueError("Setting key is required")
