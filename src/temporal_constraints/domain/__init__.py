"""Domain layer — temporal kinds, values, zones, durations and normalization.

This layer depends only on stdlib, pydantic and python-dateutil.
It must never import from services, commands, output, or config.
"""
