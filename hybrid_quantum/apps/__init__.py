"""Applications built on the hybrid quantum engine packages."""
