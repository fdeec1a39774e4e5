"""Top-level mdtangle commands (auto-discovered by the dispatcher)."""
