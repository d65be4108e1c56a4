"""Service layer — validation, aggregation, and the archive pipeline.

Services may import from domain and infrastructure layers.
They must never import from commands or output.
"""
