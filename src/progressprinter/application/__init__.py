"""Application layer: formatting and the progress printer."""
