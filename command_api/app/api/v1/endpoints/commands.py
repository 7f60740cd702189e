"""
Command endpoints for API v1.

These routes expose a CRUD API for stored commands.  Listing and
retrieving commands is open to anonymous clients; creating, updating
and deleting require a bearer token.

Every handler works on its own ``CommandRepo`` bound to the
connection opened for the current request.
"""

import sqlite3
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from command_api.app.core.db import get_db
from command_api.app.core.security import get_current_user
from command_api.app.schemas.command import CommandCreate, CommandRead, CommandUpdate
from command_api.app.services import command_mapper
from command_api.app.services.command_repo import CommandNotFoundError, CommandRepo
from command_api.app.services.command_validator import ensure_valid

router = APIRouter()


def get_command_repo(conn: sqlite3.Connection = Depends(get_db)) -> CommandRepo:
    """Dependency returning a repository scoped to the current request."""
    return CommandRepo(conn)


@router.get("", response_model=List[CommandRead])
async def list_commands(repo: CommandRepo = Depends(get_command_repo)) -> List[CommandRead]:
    """Return every stored command."""
    return [command_mapper.to_read(c) for c in repo.get_all_commands()]


@router.get("/{command_id}", response_model=CommandRead)
async def get_command(command_id: int, repo: CommandRepo = Depends(get_command_repo)) -> CommandRead:
    """Retrieve a single command by ID.

    Returns HTTP 404 with an empty body if the command does not exist.
    """
    command = repo.get_command_by_id(command_id)
    if command is None:
        raise CommandNotFoundError(command_id)
    return command_mapper.to_read(command)


@router.post("", response_model=CommandRead, status_code=status.HTTP_201_CREATED)
async def create_command(
    command_in: CommandCreate,
    request: Request,
    response: Response,
    repo: CommandRepo = Depends(get_command_repo),
    current_user: dict = Depends(get_current_user),
) -> CommandRead:
    """Create a new command.

    Responds with HTTP 201, the stored command and a ``Location``
    header pointing at it, or HTTP 400 listing every rule the body
    violates.
    """
    ensure_valid(command_in)
    command = command_mapper.from_create(command_in)
    repo.create_command(command)
    repo.save_changes()
    response.headers["Location"] = str(request.url_for("get_command", command_id=command.id))
    return command_mapper.to_read(command)


@router.put("/{command_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_command(
    command_id: int,
    command_in: CommandUpdate,
    repo: CommandRepo = Depends(get_command_repo),
    current_user: dict = Depends(get_current_user),
) -> None:
    """Overwrite all fields of an existing command.

    Validation runs before the lookup, so an invalid body yields 400
    even for an unknown ID.
    """
    ensure_valid(command_in)
    command = repo.get_command_by_id(command_id)
    if command is None:
        raise CommandNotFoundError(command_id)
    command_mapper.apply_update(command_in, command)
    repo.save_changes()
    return None


@router.delete("/{command_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_command(
    command_id: int,
    repo: CommandRepo = Depends(get_command_repo),
    current_user: dict = Depends(get_current_user),
) -> None:
    """Delete a command by ID."""
    command = repo.get_command_by_id(command_id)
    if command is None:
        raise CommandNotFoundError(command_id)
    repo.delete_command(command)
    repo.save_changes()
    return None
