"""Ingestion layer.

This package contains the value converters used by the merge field tables
and the router that turns gateway dispatches into cache creates, merges
and removals.
"""

__all__: list[str] = []
