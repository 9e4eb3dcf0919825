"""Core record types shared by the gateway, the flows and the renderer."""

from pydantic import BaseModel, ConfigDict, Field


class Creature(BaseModel):
    """A creature reduced to the fields the battle uses.

    Instances are immutable; two creatures built from the same source
    record compare equal.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(default=0, ge=0, description="Source id (0 when missing)")
    name: str = Field(default="", description="Creature name")
    front_sprite: str = Field(default="", description="Front artwork URL")
    back_sprite: str = Field(default="", description="Back artwork URL")
    hp: int = Field(default=0, ge=0, description="Base hp stat")
    attack: int = Field(default=0, ge=0, description="Base attack stat")
    type_name: str = Field(default="unknown", description="Primary type name")


class TypeMember(BaseModel):
    """Entry of a by-type listing."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    url: str = ""
