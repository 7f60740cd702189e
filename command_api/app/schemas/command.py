"""
Pydantic schemas for commands.

Three wire shapes exist: ``CommandRead`` for responses and
``CommandCreate``/``CommandUpdate`` for request bodies.  Fields use
camelCase aliases on the wire (``howTo``, ``commandLine``) and
snake_case attributes in Python.  Request shapes leave every field
optional so that missing values are reported by
``services.command_validator`` together with the other rule
violations.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CommandCreate(BaseModel):
    """Schema for creating a new command."""

    model_config = ConfigDict(populate_by_name=True)

    how_to: Optional[str] = Field(None, alias="howTo", description="What the command does")
    platform: Optional[str] = Field(None, description="Platform tag, at most 5 characters")
    command_line: Optional[str] = Field(None, alias="commandLine", description="The command line itself")


class CommandUpdate(BaseModel):
    """Schema for updating an existing command.

    All three text fields are overwritten; there is no partial update.
    """

    model_config = ConfigDict(populate_by_name=True)

    how_to: Optional[str] = Field(None, alias="howTo")
    platform: Optional[str] = None
    command_line: Optional[str] = Field(None, alias="commandLine")


class CommandRead(BaseModel):
    """Schema for reading a command."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    how_to: str = Field(..., alias="howTo")
    platform: str
    command_line: str = Field(..., alias="commandLine")
