"""
ActivateLicenseCommand.

Command to activate this instance with a license activation key.
"""
from dataclasses import dataclass


@dataclass
class ActivateLicenseCommand:
    """Command to activate a license key."""

    activation_key: str
