"""View models pushed to the presentation surface."""

from pydantic import BaseModel, Field

PLACEHOLDER = "_"


class SlotView(BaseModel):
    """One creature display slot."""

    name: str = PLACEHOLDER
    hp: str = PLACEHOLDER
    attack: str = PLACEHOLDER
    image: str = Field(default="", description="Sprite shown at rest")
    hover_image: str = Field(default="", description="Sprite shown on hover")
    alt: str = ""


class GalleryEntry(BaseModel):
    """A same-type creature shown after a win."""

    name: str
    sprite: str = ""


class BattleView(BaseModel):
    """Complete projection of the battle onto the presentation surface."""

    title: str = f"{PLACEHOLDER} vs {PLACEHOLDER}"
    first: SlotView = Field(default_factory=SlotView)
    second: SlotView = Field(default_factory=SlotView)
    result: str = ""
    winner_head: str = ""
    winner_type: str = ""
    battle_enabled: bool = False
    battle_label: str = "Battle"
    gallery_visible: bool = False
    gallery: list[GalleryEntry] = Field(default_factory=list)
