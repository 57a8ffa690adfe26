"""Code shared by the agent module services."""
