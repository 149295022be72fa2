"""dirstack CLI command modules."""
