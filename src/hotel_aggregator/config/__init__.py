"""Runtime settings and supplier configuration."""
