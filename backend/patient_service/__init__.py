"""Patient and medical case record service."""
