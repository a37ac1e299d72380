"""Ingestion layer.

This package contains the leaves that query the host (inventory fetch,
single-interface probe, enrichment) and turn their output into
:class:`pynetif.models.InterfaceRecord` values.
"""

__all__: list[str] = []
