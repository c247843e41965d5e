"""
Test settings for InstanceLicenseService.
"""

import os

from .base import *  # noqa: F403, F401

DEBUG = False

# In-memory SQLite for fast, isolated tests
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# Tests drive the lifecycle explicitly
LICENSE = {
    **LICENSE,  # noqa: F405
    "CERT": "",
    "AUTO_RENEW_ENABLED": False,
    "INIT_ON_STARTUP": False,
    "DEV_ACTIVATION_KEYS": {
        "test-activation-key": {
            "entitlements": [
                {
                    "id": "ent-enterprise",
                    "productId": "enterprise",
                    "features": {
                        "feat:sharing": True,
                        "quota:users": 10,
                        "planName": "Enterprise",
                    },
                    "productMetadata": {"terms": {"isMainPlan": True}},
                }
            ],
            "managementJwt": "test-management-jwt",
        },
    },
}

EXECUTIONS_MODE = "regular"

MULTI_MAIN_SETUP = {
    "ENABLED": False,
    "INSTANCE_TYPE": "unset",
}

INSTANCE = {
    "ROLE": "main",
    "ID": "test-instance",
}

COMMAND_CHANNEL = {
    **COMMAND_CHANNEL,  # noqa: F405
    "BACKEND": "memory",
}

# Disable logging during tests
LOGGING_CONFIG = None

# No exporters or metrics server in tests
os.environ.setdefault("OTEL_SDK_DISABLED", "true")
