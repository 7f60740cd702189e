"""
Service layer.

Data access (``command_repo``), shape mapping (``command_mapper``) and
request validation (``command_validator``) for the commands domain.
"""
