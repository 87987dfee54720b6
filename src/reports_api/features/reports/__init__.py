"""Report records: CRUD endpoints under /api/reports.

The router validates identities and builds response headers, the service
wraps each use case in a store transaction, and the mapper converts between
the persisted ``Report`` entity and the ``ReportDTO`` wire shape."""
