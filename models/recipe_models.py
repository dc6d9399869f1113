"""
Recipe-related data models for RECOOK BOOK.

Recipes are community submissions built around leftover ingredients.
Multi-line fields are stored as newline-delimited text, exactly as submitted.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Dict, Any

from .timestamps import parse_timestamp, format_timestamp


RECIPE_CATEGORIES = ["breakfast", "lunch", "dinner", "snack", "dessert"]

MIN_PREP_TIME_MINUTES = 1
MAX_PREP_TIME_MINUTES = 300


class SortMode(Enum):
    """Sort options for the recipe listing"""
    NEWEST = "newest"
    POPULAR = "popular"
    ALPHABETICAL = "alphabetical"


def split_lines(text: str) -> List[str]:
    """Split a newline-delimited field into trimmed, non-empty entries"""
    return [line.strip() for line in text.split('\n') if line.strip()]


@dataclass
class Recipe:
    """
    Core recipe model mapping to one entry of the stored recipe list.
    Only `upvotes` changes after creation.
    """
    id: int
    title: str
    category: str
    prep_time: int
    leftover_ingredients: str
    instructions: str
    author: str
    additional_ingredients: str = ""
    tips: str = ""
    upvotes: int = 0
    date_added: datetime = field(default_factory=datetime.now)

    def get_leftover_list(self) -> List[str]:
        return split_lines(self.leftover_ingredients)

    def get_additional_list(self) -> List[str]:
        return split_lines(self.additional_ingredients)

    def get_instruction_steps(self) -> List[str]:
        """Ordered instruction steps"""
        return split_lines(self.instructions)

    def matches_search(self, term: str) -> bool:
        """Case-insensitive substring match on title and both ingredient fields"""
        needle = term.lower()
        return (
            needle in self.title.lower()
            or needle in self.leftover_ingredients.lower()
            or needle in self.additional_ingredients.lower()
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the stored record shape"""
        return {
            'id': self.id,
            'title': self.title,
            'category': self.category,
            'prepTime': self.prep_time,
            'leftoverIngredients': self.leftover_ingredients,
            'additionalIngredients': self.additional_ingredients,
            'instructions': self.instructions,
            'tips': self.tips,
            'author': self.author,
            'upvotes': self.upvotes,
            'dateAdded': format_timestamp(self.date_added)
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Recipe':
        """Build a recipe from a stored record"""
        return cls(
            id=int(data['id']),
            title=data['title'],
            category=data.get('category', ''),
            prep_time=int(data.get('prepTime', 0)),
            leftover_ingredients=data.get('leftoverIngredients', ''),
            additional_ingredients=data.get('additionalIngredients') or '',
            instructions=data.get('instructions', ''),
            tips=data.get('tips') or '',
            author=data.get('author', ''),
            upvotes=max(0, int(data.get('upvotes', 0))),
            date_added=parse_timestamp(data.get('dateAdded'))
        )
