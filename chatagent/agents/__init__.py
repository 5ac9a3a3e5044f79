"""Agent runner and prompt construction."""
