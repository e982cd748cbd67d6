"""
friend_links.notifications

Outbound notification boundary (webhook delivery).
"""

# Package marker.
