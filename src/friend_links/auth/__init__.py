"""
friend_links.auth

Authentication/authorization package.

Responsibilities:
- JWT helpers and validation.
- FastAPI auth dependencies (optional/required Principal + RBAC).
"""

# Package marker.
