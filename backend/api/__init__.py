"""HTTP routes for the static file service."""
