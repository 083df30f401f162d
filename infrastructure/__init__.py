"""Default implementations of the domain ports."""
