"""Infrastructure layer for AAMVA-Forge: configuration, settings and logging."""
