"""Pydantic models describing one command's help.

These are the records the markdown converter consumes.  They are produced by
the loaders (module introspection, script docstrings) or read directly from a
JSON help export, and are never modified after construction.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ParameterInfo(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    # JSON exports from other help systems may spell this "typeName" or "type"
    type_name: str = Field(default="", validation_alias=AliasChoices("type_name", "typeName", "type"))
    description: str = ""


class HelpRecord(BaseModel):
    """Name, usage syntax, summary, long description and parameters of a command."""

    model_config = ConfigDict(frozen=True)

    name: str
    syntax: str = ""
    synopsis: str = ""
    description: str = ""
    parameters: tuple[ParameterInfo, ...] = ()
