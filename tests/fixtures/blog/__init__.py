"""Blog fixture package: entities, tables and their policies."""
