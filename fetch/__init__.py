"""Transport layer: Horizons HTTP access and retrying service."""
