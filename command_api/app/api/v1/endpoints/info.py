"""
Information endpoint for API v1.

Returns the service name, version and the number of stored commands.
Publicly accessible; suitable as a liveness probe that also touches
the database.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from command_api.app.api.v1.endpoints.commands import get_command_repo
from command_api.app.core.config import settings
from command_api.app.services.command_repo import CommandRepo

router = APIRouter()


@router.get("", response_model=Dict[str, Any])
async def get_info(repo: CommandRepo = Depends(get_command_repo)) -> Dict[str, Any]:
    return {
        "name": settings.project_name,
        "version": settings.api_version,
        "commands": repo.count_commands(),
    }
