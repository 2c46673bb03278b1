"""Zman identifiers and display metadata."""

from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel


class ZmanCategory(str, Enum):
    """Part of the day a zman belongs to."""
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"


class ZmanOption(BaseModel):
    """A selectable zman."""
    id: str
    label: str
    category: ZmanCategory

    class Config:
        """Pydantic config."""
        frozen = True


ZMANIM_OPTIONS: List[ZmanOption] = [
    ZmanOption(id="alotHaShachar", label="Alot HaShachar", category=ZmanCategory.MORNING),
    ZmanOption(id="misheyakir", label="Misheyakir", category=ZmanCategory.MORNING),
    ZmanOption(id="sunrise", label="Sunrise", category=ZmanCategory.MORNING),
    ZmanOption(id="sofZmanShma", label="Sof Zman Shma", category=ZmanCategory.MORNING),
    ZmanOption(id="sofZmanTfilla", label="Sof Zman Tfilla", category=ZmanCategory.MORNING),
    ZmanOption(id="chatzot", label="Chatzot", category=ZmanCategory.AFTERNOON),
    ZmanOption(id="minchaGedola", label="Mincha Gedola", category=ZmanCategory.AFTERNOON),
    ZmanOption(id="minchaKetana", label="Mincha Ketana", category=ZmanCategory.AFTERNOON),
    ZmanOption(id="plagHaMincha", label="Plag HaMincha", category=ZmanCategory.AFTERNOON),
    ZmanOption(id="sunset", label="Sunset", category=ZmanCategory.EVENING),
    ZmanOption(id="tzeit42min", label="Tzeit 42 min", category=ZmanCategory.NIGHT),
    ZmanOption(id="tzeit72min", label="Tzeit 72 min", category=ZmanCategory.NIGHT),
]

DEFAULT_ZMANIM: List[str] = ["sunrise", "sunset", "chatzot"]

_OPTIONS_BY_ID: Dict[str, ZmanOption] = {option.id: option for option in ZMANIM_OPTIONS}


def get_zman_option(zman_id: str) -> Optional[ZmanOption]:
    """Look up a known zman, or None for an unrecognized id."""
    return _OPTIONS_BY_ID.get(zman_id)


def get_zman_label(zman_id: str) -> str:
    """Get the display label for a zman, falling back to the raw id."""
    option = _OPTIONS_BY_ID.get(zman_id)
    return option.label if option else zman_id


def get_zman_category(zman_id: str) -> Optional[ZmanCategory]:
    """Get the category for a zman, or None if it is not a known id."""
    option = _OPTIONS_BY_ID.get(zman_id)
    return option.category if option else None


def sort_zmanim(zman_ids: List[str]) -> List[str]:
    """Order zman ids by time of day; unknown ids keep their order at the end."""
    position = {option.id: index for index, option in enumerate(ZMANIM_OPTIONS)}
    return sorted(zman_ids, key=lambda zman_id: position.get(zman_id, len(position)))
