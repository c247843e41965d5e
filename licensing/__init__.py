"""
Licensing module - License state of this instance.

This module handles:
- License certificate persistence
- Entitlement manager lifecycle (init, activate, reload, renew, shutdown)
- Reacting to entitlement changes across instances
- Feature and quota queries for the rest of the application
"""
