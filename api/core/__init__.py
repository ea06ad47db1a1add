"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks every resource uses (settings,
DB wiring, logging, error mapping). Keep resource-specific SQL in the
corresponding resource package (e.g. `records/`).
"""
