"""Task tracking REST API: JWT authentication, role-gated admin routes and per-user tasks."""

__version__ = "0.1.0"
