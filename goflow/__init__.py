"""Building blocks for concurrent services: errors, validation, test doubles, limited routes and tasks."""

__version__ = "0.1.0"

__all__ = [
    "errors",
    "validation",
    "mocks",
    "webservice",
    "recipes",
    "limited_routes",
    "tasks",
]