"""Domain records: pages, plugins, program snapshot and site configuration."""
