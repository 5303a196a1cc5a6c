"""Word bank - categories of secret words and their decoy hints."""

import random
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, TypeVar, Union

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from .errors import InvalidCategory

RANDOM_CATEGORY = "Random"

T = TypeVar("T")


@dataclass(frozen=True)
class WordPair:
    """The word the crew sees and the vaguer hint the impostor sees."""

    secret_word: str
    decoy_hint: str

    def __str__(self) -> str:
        return self.secret_word


def _pairs(*items: tuple[str, str]) -> tuple[WordPair, ...]:
    return tuple(WordPair(secret_word=s, decoy_hint=d) for s, d in items)


# Built-in categories
CATEGORIES: dict[str, tuple[WordPair, ...]] = {
    "Animals": _pairs(
        ("Lion", "Wild Beast"),
        ("Penguin", "Cold Climate Creature"),
        ("Giraffe", "Herbivore"),
        ("Elephant", "Grey Animal"),
        ("Shark", "Ocean Predator"),
        ("Eagle", "Flying Creature"),
        ("Kangaroo", "Australian Native"),
        ("Frog", "Pond Dweller"),
        ("Snake", "Scaly Creature"),
    ),
    "Places": _pairs(
        ("Hospital", "Emergency Location"),
        ("School", "Public Institution"),
        ("Beach", "Vacation Spot"),
        ("Library", "Quiet Zone"),
        ("Gym", "Training Area"),
        ("Cinema", "Ticketed Venue"),
        ("Museum", "Tourist Attraction"),
        ("Restaurant", "Social Gathering Spot"),
    ),
    "Food": _pairs(
        ("Pizza", "Party Food"),
        ("Sushi", "Expensive Meal"),
        ("Ice Cream", "Sweet Treat"),
        ("Hamburger", "American Food"),
        ("Taco", "Street Food"),
        ("Spaghetti", "Dinner Dish"),
        ("Popcorn", "Crunchy Snack"),
        ("Donut", "Breakfast Item"),
    ),
    "Objects": _pairs(
        ("Laptop", "Work Tool"),
        ("Guitar", "Wooden Object"),
        ("Sofa", "Comfortable Spot"),
        ("Toaster", "Heating Device"),
        ("Bicycle", "Transport Mode"),
        ("Camera", "Travel Accessory"),
        ("Umbrella", "Protective Gear"),
        ("Clock", "Wall Decoration"),
    ),
}


def pick(rng: random.Random, items: Sequence[T]) -> T:
    """Pick one item uniformly at random.

    Only ``rng.randrange`` is used, so any object providing it can act as
    the random source.
    """
    return items[rng.randrange(len(items))]


class WordPairEntry(BaseModel):
    """One word pair as written in a word bank file."""
    secret: str
    decoy: str

    @field_validator("secret", "decoy")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("word must not be blank")
        return value


class WordBankFile(BaseModel):
    """Schema of a YAML word bank file."""
    categories: dict[str, list[WordPairEntry]]


class WordBank:
    """Read-only mapping of category name to word pairs."""

    def __init__(self, categories: Optional[dict[str, Sequence[WordPair]]] = None):
        """Initialize the word bank.

        Args:
            categories: Category name to word pairs. Defaults to the built-in set.
        """
        source = CATEGORIES if categories is None else categories
        if not source:
            raise InvalidCategory(RANDOM_CATEGORY, [])

        self._categories: dict[str, tuple[WordPair, ...]] = {}
        for name, pairs in source.items():
            if name == RANDOM_CATEGORY:
                raise InvalidCategory(name, [n for n in source if n != RANDOM_CATEGORY])
            if not pairs:
                raise InvalidCategory(name, [])
            self._categories[name] = tuple(pairs)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "WordBank":
        """Load a word bank from a YAML file.

        Args:
            path: File containing a ``categories`` mapping of
                ``{secret, decoy}`` entries.

        Returns:
            The loaded word bank.
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        try:
            parsed = WordBankFile.model_validate(data)
        except ValidationError as e:
            raise InvalidCategory(str(path), []) from e

        return cls({
            name: [WordPair(secret_word=e.secret, decoy_hint=e.decoy) for e in entries]
            for name, entries in parsed.categories.items()
        })

    def category_names(self) -> list[str]:
        """Get the concrete category names in their defined order."""
        return list(self._categories)

    def selectable_categories(self) -> list[str]:
        """Get the choices offered to players, with Random first."""
        return [RANDOM_CATEGORY, *self._categories]

    def pairs_for(self, name: str) -> tuple[WordPair, ...]:
        """Get every word pair in a category."""
        if name not in self._categories:
            raise InvalidCategory(name, self.category_names())
        return self._categories[name]

    def resolve_category(
        self,
        selection: str,
        rng: Optional[random.Random] = None,
    ) -> tuple[str, WordPair]:
        """Turn a category selection into a concrete category and word pair.

        Args:
            selection: A category name, or ``"Random"`` to pick a category first.
            rng: Random source. Defaults to a freshly seeded generator.

        Returns:
            Tuple of (resolved category name, chosen word pair).
        """
        if rng is None:
            rng = random.Random()
        if selection == RANDOM_CATEGORY:
            name = pick(rng, self.category_names())
        else:
            name = selection
        pairs = self.pairs_for(name)
        return name, pick(rng, pairs)

    def __contains__(self, name: object) -> bool:
        return name in self._categories

    def __len__(self) -> int:
        return len(self._categories)


DEFAULT_WORD_BANK = WordBank()
