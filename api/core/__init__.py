"""
Shared, cross-cutting code for the API.

`core/` should contain small building blocks that multiple features use
(DB wiring, errors, ids, email, logging). Keep feature-specific SQL and
business rules in the corresponding feature package (e.g. `invites/`).
"""
