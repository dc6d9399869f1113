"""
Recipe catalog for RECOOK BOOK.

Owns the recipe list and the per-identity upvote records in the durable
tier, plus the derived views built from them (featured recipes, filtered
listings). Derived views are recomputed from storage on every call; nothing
is cached.

Stored recipe records that cannot be read are hidden from every view but are
kept in storage when the list is rewritten.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from unidecode import unidecode

from models import Recipe, SortMode
from utils import get_logger, log_event, log_operation, ClockIdSource, system_now
from .storage_service import StorageService, StorageTier

logger = get_logger(__name__)

RECIPES_KEY = "recipes"
UPVOTES_KEY = "upvotedRecipeIds"
DEFAULT_IDENTITY = "local"

SAMPLE_RECIPES = [
    {
        'id': 1,
        'title': "Leftover Rice Fried Rice",
        'category': "dinner",
        'prepTime': 15,
        'leftoverIngredients': "Cooked rice\nLeftover vegetables\nCooked chicken (optional)",
        'additionalIngredients': "2 eggs\n1 onion\nSoy sauce\nOil\nSalt and pepper",
        'instructions': (
            "1. Heat oil in a large pan or wok\n2. Scramble eggs and set aside\n"
            "3. Sauté onion until soft\n4. Add leftover rice and vegetables\n"
            "5. Stir-fry for 5-7 minutes\n6. Add scrambled eggs back in\n"
            "7. Season with soy sauce, salt, and pepper\n8. Serve hot"
        ),
        'tips': "Use day-old rice for best texture. Add any leftover proteins you have!",
        'author': "Sarah Chen",
        'upvotes': 24,
        'dateAdded': "2024-01-15T00:00:00"
    },
    {
        'id': 2,
        'title': "Stale Bread French Toast",
        'category': "breakfast",
        'prepTime': 10,
        'leftoverIngredients': "Stale bread slices",
        'additionalIngredients': "2 eggs\n1/2 cup milk\n1 tsp vanilla\nButter\nMaple syrup",
        'instructions': (
            "1. Whisk eggs, milk, and vanilla in a shallow dish\n"
            "2. Dip bread slices in mixture, coating both sides\n"
            "3. Heat butter in a pan over medium heat\n"
            "4. Cook bread slices 2-3 minutes per side until golden\n5. Serve with maple syrup"
        ),
        'tips': "Thicker, staler bread works better. Add cinnamon for extra flavor!",
        'author': "Mike Johnson",
        'upvotes': 18,
        'dateAdded': "2024-01-20T00:00:00"
    },
    {
        'id': 3,
        'title': "Vegetable Scrap Broth",
        'category': "lunch",
        'prepTime': 60,
        'leftoverIngredients': "Vegetable scraps (onion peels, carrot tops, celery leaves, herb stems)",
        'additionalIngredients': "Water\nSalt\nPepper\nBay leaves",
        'instructions': (
            "1. Collect vegetable scraps in a large pot\n2. Cover with water (about 8 cups)\n"
            "3. Add bay leaves, salt, and pepper\n4. Bring to boil, then simmer for 45-60 minutes\n"
            "5. Strain out solids\n6. Use immediately or freeze for later"
        ),
        'tips': "Save scraps in the freezer until you have enough. Great base for soups!",
        'author': "Emma Rodriguez",
        'upvotes': 31,
        'dateAdded': "2024-01-25T00:00:00"
    },
    {
        'id': 4,
        'title': "Overripe Banana Smoothie",
        'category': "snack",
        'prepTime': 5,
        'leftoverIngredients': "Overripe bananas",
        'additionalIngredients': "1 cup milk or yogurt\n1 tbsp honey\nIce cubes\nPeanut butter (optional)",
        'instructions': (
            "1. Peel and slice overripe bananas\n2. Add to blender with milk/yogurt\n"
            "3. Add honey and peanut butter if using\n4. Blend until smooth\n"
            "5. Add ice and blend again\n6. Serve immediately"
        ),
        'tips': "Freeze overripe bananas for an extra thick smoothie. Add spinach for nutrition!",
        'author': "David Park",
        'upvotes': 15,
        'dateAdded': "2024-02-01T00:00:00"
    },
    {
        'id': 5,
        'title': "Leftover Pasta Frittata",
        'category': "dinner",
        'prepTime': 20,
        'leftoverIngredients': "Cooked pasta\nLeftover vegetables",
        'additionalIngredients': "6 eggs\n1/2 cup cheese\nOlive oil\nSalt and pepper",
        'instructions': (
            "1. Preheat oven to 375°F\n2. Beat eggs with salt and pepper\n"
            "3. Heat oil in oven-safe pan\n4. Add pasta and vegetables, heat through\n"
            "5. Pour eggs over pasta mixture\n6. Sprinkle with cheese\n"
            "7. Cook on stove 3-4 minutes\n8. Transfer to oven for 10-12 minutes until set"
        ),
        'tips': "Any pasta shape works! Great way to use up small amounts of different vegetables.",
        'author': "Lisa Thompson",
        'upvotes': 22,
        'dateAdded': "2024-02-05T00:00:00"
    }
]


def upvotes_key(identity: str) -> str:
    """Durable key holding one browser identity's upvoted recipe ids"""
    return f"{UPVOTES_KEY}:{identity}"


def resolve_sort_mode(sort_mode: Union[SortMode, str, None]) -> SortMode:
    """Coerce a sort mode; an empty value means newest first"""
    if not sort_mode:
        return SortMode.NEWEST
    return SortMode(sort_mode)


def title_sort_key(recipe: Recipe):
    """Accent- and case-insensitive title ordering"""
    return unidecode(recipe.title).casefold(), recipe.title


def record_id(record: Any) -> Optional[int]:
    """Id of a raw stored recipe record, or None if it has no usable id"""
    try:
        return int(record['id'])
    except (KeyError, TypeError, ValueError):
        return None


class RecipeCatalog:
    """
    Recipe collection with per-identity upvote tracking.

    The upvote record belongs to a browser identity, not to an account. Each
    identity's record is its own durable key, so visitors sharing one
    durable store never see or undo each other's votes.
    """

    def __init__(self, storage: StorageService,
                 id_source: Optional[Callable[[], int]] = None,
                 clock: Optional[Callable[[], datetime]] = None,
                 identity: str = DEFAULT_IDENTITY):
        self.storage = storage
        self.id_source = id_source or ClockIdSource()
        self.clock = clock or system_now
        self.identity = identity
        self.upvotes_key = upvotes_key(identity)

    # Reads

    def list(self) -> List[Recipe]:
        """Readable recipes in stored order (newest submissions first)"""
        return self._load_recipes()

    def get(self, recipe_id: int) -> Optional[Recipe]:
        for recipe in self._load_recipes():
            if recipe.id == recipe_id:
                return recipe
        return None

    def count(self) -> int:
        return len(self._load_recipes())

    def upvoted_ids(self) -> List[int]:
        """Recipe ids upvoted by this browser identity, without duplicates"""
        stored = self.storage.read(StorageTier.DURABLE, self.upvotes_key, default=[])
        if not isinstance(stored, list):
            log_event(logger, "upvotes.malformed", logging.WARNING, identity=self.identity)
            return []

        ids = []
        for value in stored:
            if isinstance(value, int) and not isinstance(value, bool) and value not in ids:
                ids.append(value)
        return ids

    def is_upvoted(self, recipe_id: int) -> bool:
        return recipe_id in self.upvoted_ids()

    # Mutations

    def add(self, fields: Dict[str, Any]) -> Recipe:
        """
        Create a recipe from already-validated form fields and prepend it.

        Args:
            fields: title, category, prep_time, leftover_ingredients,
                instructions, author, and optionally additional_ingredients, tips
        """
        recipe = Recipe(
            id=self.id_source(),
            title=fields['title'],
            category=fields['category'],
            prep_time=int(fields['prep_time']),
            leftover_ingredients=fields['leftover_ingredients'],
            instructions=fields['instructions'],
            author=fields['author'],
            additional_ingredients=fields.get('additional_ingredients') or '',
            tips=fields.get('tips') or '',
            upvotes=0,
            date_added=self.clock()
        )

        with self.storage.mutation(RECIPES_KEY):
            records = self._load_records()
            records.insert(0, recipe.to_dict())
            self.storage.write(StorageTier.DURABLE, RECIPES_KEY, records)

        log_event(logger, "recipe.added", recipe_id=recipe.id, title=recipe.title, category=recipe.category)
        return recipe

    def delete(self, recipe_id: int) -> bool:
        """
        Remove a recipe and this identity's upvote mark on it.
        Returns False if the recipe was already gone.
        """
        with self.storage.mutation(RECIPES_KEY, self.upvotes_key):
            records = self._load_records()
            remaining = [record for record in records if record_id(record) != recipe_id]
            upvoted = self.upvoted_ids()
            removed = len(remaining) != len(records)

            if not removed and recipe_id not in upvoted:
                log_event(logger, "recipe.delete_ignored", logging.DEBUG, recipe_id=recipe_id)
                return False

            self.storage.write_many(StorageTier.DURABLE, {
                RECIPES_KEY: remaining,
                self.upvotes_key: [i for i in upvoted if i != recipe_id]
            })

        if removed:
            log_event(logger, "recipe.deleted", recipe_id=recipe_id)
        return removed

    def toggle_upvote(self, recipe_id: int,
                      upvoted_ids: Optional[Iterable[int]] = None) -> Optional[Recipe]:
        """
        Flip this identity's upvote on a recipe.

        The recipe's count and the identity's upvote record are written in
        one durable transaction. Unknown ids are ignored.

        Args:
            recipe_id: Recipe to toggle
            upvoted_ids: The identity's current upvote set; read from storage if omitted

        Returns:
            The updated recipe, or None if no recipe has this id
        """
        with self.storage.mutation(RECIPES_KEY, self.upvotes_key):
            records = self._load_records()
            index, recipe = self._find(records, recipe_id)
            if recipe is None:
                log_event(logger, "upvote.ignored", logging.DEBUG, recipe_id=recipe_id)
                return None

            upvoted = list(dict.fromkeys(upvoted_ids)) if upvoted_ids is not None else self.upvoted_ids()

            if recipe_id in upvoted:
                recipe.upvotes = max(0, recipe.upvotes - 1)
                upvoted = [i for i in upvoted if i != recipe_id]
            else:
                recipe.upvotes += 1
                upvoted.append(recipe_id)

            records[index] = recipe.to_dict()
            self.storage.write_many(StorageTier.DURABLE, {
                RECIPES_KEY: records,
                self.upvotes_key: upvoted
            })

        log_event(logger, "upvote.toggled", recipe_id=recipe_id, identity=self.identity,
                  upvoted=recipe_id in upvoted, upvotes=recipe.upvotes)
        return recipe

    def ensure_sample_data(self) -> bool:
        """Write the sample recipes if the catalog is empty"""
        with self.storage.mutation(RECIPES_KEY):
            if self._load_records():
                return False
            with log_operation(logger, "recipe.seed_samples", count=len(SAMPLE_RECIPES)):
                self.storage.write(StorageTier.DURABLE, RECIPES_KEY, [dict(r) for r in SAMPLE_RECIPES])
        return True

    # Derived views

    def featured(self, n: int = 3) -> List[Recipe]:
        """Top `n` recipes by upvotes; ties keep stored order"""
        return sorted(self._load_recipes(), key=lambda r: r.upvotes, reverse=True)[:n]

    def filter(self, search_term: str = "", category: str = "",
               sort_mode: Union[SortMode, str, None] = SortMode.NEWEST) -> List[Recipe]:
        """
        Search, narrow by category, then sort.

        An empty search term or category matches everything, and an empty
        sort mode means newest first. All sorts are stable, so equal keys
        keep stored order.
        """
        sort_mode = resolve_sort_mode(sort_mode)
        term = (search_term or "").strip()

        results = [
            recipe for recipe in self._load_recipes()
            if (not term or recipe.matches_search(term))
            and (not category or recipe.category == category)
        ]

        if sort_mode is SortMode.POPULAR:
            results.sort(key=lambda r: r.upvotes, reverse=True)
        elif sort_mode is SortMode.ALPHABETICAL:
            results.sort(key=title_sort_key)
        else:
            results.sort(key=lambda r: r.date_added, reverse=True)

        return results

    # Storage helpers

    def _load_records(self) -> list:
        records = self.storage.read(StorageTier.DURABLE, RECIPES_KEY, default=[])
        if not isinstance(records, list):
            log_event(logger, "recipe.list_malformed", logging.WARNING, stored_type=type(records).__name__)
            return []
        return records

    def _parse(self, record: Any) -> Optional[Recipe]:
        try:
            return Recipe.from_dict(record)
        except (KeyError, TypeError, ValueError) as e:
            log_event(logger, "recipe.unreadable", logging.WARNING, recipe_id=record_id(record), error=str(e))
            return None

    def _find(self, records: list, recipe_id: int):
        for index, record in enumerate(records):
            if record_id(record) == recipe_id:
                recipe = self._parse(record)
                if recipe is not None:
                    return index, recipe
        return None, None

    def _load_recipes(self) -> List[Recipe]:
        recipes = []
        for record in self._load_records():
            recipe = self._parse(record)
            if recipe is not None:
                recipes.append(recipe)
        return recipes
