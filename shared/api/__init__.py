"""HTTP-facing helpers shared by all apps: response envelope and error translation."""
