"""
friend_links.services

Service-layer package.

Responsibilities:
- Own transaction boundaries and persistence decisions.
- Apply permission rules and trigger notifications.
"""

# Package marker.
