"""Application layer: routes commands to the Order aggregate."""
