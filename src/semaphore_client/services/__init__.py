"""Resource services built on the API integrations."""
