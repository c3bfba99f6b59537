"""
Response models shared by the API routers.

Cards and rules are exposed as flat pydantic views; the frozen dataclasses
never cross the HTTP boundary directly.
"""

from pydantic import BaseModel, Field

from marvelbot.models.card import Card
from marvelbot.models.rule import Rule


class PackView(BaseModel):
    name: str
    sku: str


class CardView(BaseModel):
    """A matched card."""

    name: str
    names: list[str]
    types: list[str] = Field(default_factory=list)
    packs: list[PackView] = Field(default_factory=list)
    sets: list[str] = Field(default_factory=list)
    image_urls: list[str] = Field(default_factory=list)
    marvelcdb_url: str | None = None
    horizontal: bool = False

    @classmethod
    def from_card(cls, card: Card) -> "CardView":
        return cls(
            name=card.display_name,
            names=list(card.names),
            types=[face.type for face in card.faces],
            packs=[PackView(name=pack.name, sku=pack.sku) for pack in card.packs],
            sets=[card_set.name for card_set in card.sets],
            image_urls=list(card.image_urls),
            marvelcdb_url=card.marvelcdb_url,
            horizontal=card.horizontal,
        )


class RuleView(BaseModel):
    """A rule from the Rules Reference."""

    name: str
    text: str
    text2: str | None = None
    related: list[str] = Field(default_factory=list)

    @classmethod
    def from_rule(cls, rule: Rule) -> "RuleView":
        return cls(
            name=rule.name,
            text=rule.text,
            text2=rule.text2,
            related=list(rule.related),
        )
