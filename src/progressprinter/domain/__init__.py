"""Domain layer: outcomes, value objects, ports, exceptions."""
