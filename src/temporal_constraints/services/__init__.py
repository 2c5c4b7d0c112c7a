"""Service layer — validator engines, the constraint catalog and the check service.

Services may import from the domain layer.
They must never import from commands, output, or config.
"""
