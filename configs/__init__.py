"""Module-level configuration for flowercross."""
