"""Web interface: FastAPI routes, templates and view rendering."""
