"""Library packages of the hybrid quantum engine."""
