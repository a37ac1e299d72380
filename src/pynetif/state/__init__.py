"""State layer.

This package is the single source of truth for how inventory fetches and
per-interface probe results are merged into the last-known interface table,
and for deciding when a transitioning interface has settled.
"""
