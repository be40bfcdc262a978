"""Infrastructure: writers, environment, terminal and logging adapters."""
