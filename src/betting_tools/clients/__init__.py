"""HTTP clients for external betting sites."""
