"""
Request validation for command create and update bodies.

``validate_command`` checks every rule and returns the full list of
messages instead of stopping at the first failure.  Handlers call
``ensure_valid`` which raises ``CommandValidationError``; the
application renders that exception as HTTP 400 with an ``errors``
list.
"""

from typing import List, Optional, Union

from command_api.app.schemas.command import CommandCreate, CommandUpdate

PLATFORM_MAX_LENGTH = 5


class CommandValidationError(Exception):
    """Raised when a command body violates one or more field rules."""

    def __init__(self, errors: List[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = errors


def _is_empty(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_command(dto: Union[CommandCreate, CommandUpdate]) -> List[str]:
    """Return the messages for every rule ``dto`` violates.

    An empty list means the body is valid.
    """
    errors: List[str] = []
    if _is_empty(dto.how_to):
        errors.append("'How To' must not be empty.")
    if _is_empty(dto.platform):
        errors.append("'Platform' must not be empty.")
    elif len(dto.platform) > PLATFORM_MAX_LENGTH:
        errors.append(
            f"The length of 'Platform' must be {PLATFORM_MAX_LENGTH} characters or fewer. "
            f"You entered {len(dto.platform)} characters."
        )
    if _is_empty(dto.command_line):
        errors.append("'Command Line' must not be empty.")
    return errors


def ensure_valid(dto: Union[CommandCreate, CommandUpdate]) -> None:
    """Raise ``CommandValidationError`` if ``dto`` violates any rule."""
    errors = validate_command(dto)
    if errors:
        raise CommandValidationError(errors)
