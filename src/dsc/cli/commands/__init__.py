"""Top-level dsc commands, discovered by the dispatcher."""
