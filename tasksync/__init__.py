"""TaskSync: a small task tracker with live multi-session synchronization.

Todos are persisted by a single authoritative server process and every
change is pushed as a full ordered snapshot to all connected clients.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
