"""
friend_links.api.routers

HTTP routers, one module per resource.
"""
