"""Desktop host for the diff view: rendering, key bindings and application startup."""
