"""
Field mapping between the ``Command`` entity and its wire shapes.

Every function is a plain structural copy of identically named
fields; the identifier only travels from entity to read shape.
"""

from command_api.app.models.command import Command
from command_api.app.schemas.command import CommandCreate, CommandRead, CommandUpdate


def to_read(command: Command) -> CommandRead:
    """Map a persisted entity to its response shape."""
    return CommandRead(
        id=command.id,
        how_to=command.how_to,
        platform=command.platform,
        command_line=command.command_line,
    )


def from_create(dto: CommandCreate) -> Command:
    """Build a new, not yet persisted entity from a create request."""
    return Command(
        how_to=dto.how_to,
        platform=dto.platform,
        command_line=dto.command_line,
    )


def apply_update(dto: CommandUpdate, command: Command) -> Command:
    """Copy the fields of an update request onto an existing entity.

    The entity is modified in place and returned.
    """
    command.how_to = dto.how_to
    command.platform = dto.platform
    command.command_line = dto.command_line
    return command
