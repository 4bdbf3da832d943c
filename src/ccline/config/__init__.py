"""Configuration schema, defaults and file loading."""
