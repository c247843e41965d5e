"""
Model registry for the licensing app.

Models live in the infrastructure layer; importing them here registers them
with Django.
"""
from licensing.infrastructure.models import Setting  # noqa: F401
