"""State/cache layer.

This package is the single place that decides how incoming payloads are
merged into cached entities and how cross-entity references resolve.
"""
