"""HTTP API serving related and topic words."""
