"""Cross-cutting primitives: errors, enums, ids, configuration."""
