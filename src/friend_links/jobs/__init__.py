"""
friend_links.jobs

Background jobs.

Responsibilities:
- Run the friend link health check on a fixed interval inside the API process.
- Offer a one-shot entrypoint (`python -m friend_links.jobs`) for external cron.
"""

# Package marker.
