"""
Category Classifier.

Keyword lookup from product name to store category. Categories are
tested in declared order and the first keyword hit wins.
"""

from typing import Any, Dict, List, Sequence, Tuple

from config import get_config
from invoice_lines.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)


DEFAULT_CATEGORY = "Groceries"

DEFAULT_CATEGORIES: List[Tuple[str, Tuple[str, ...]]] = [
    ("Fruit & Veg", ("apple", "banana", "carrot", "lettuce", "tomato",
                     "organic", "fresh", "vegetable", "fruit")),
    ("Supplements", ("vitamin", "mineral", "supplement", "capsule",
                     "tablet", "protein", "omega")),
    ("Personal Care", ("soap", "shampoo", "toothpaste", "deodorant",
                       "lotion", "cream")),
    ("Fridge & Freezer", ("milk", "cheese", "yogurt", "frozen",
                          "refrigerated", "dairy")),
    ("Drinks Fridge", ("juice", "water", "drink", "beverage", "soda",
                       "kombucha")),
    ("Fresh Bread", ("bread", "loaf", "baguette", "roll", "bakery")),
    ("Bulk", ("bulk", "kg", "kilogram", "25kg", "wholesale")),
]


class CategoryClassifier:
    """
    Guesses a store category from a product name.

    Example:
        >>> classifier = CategoryClassifier()
        >>> classifier.guess_category("Organic Kale Bunch")
        'Fruit & Veg'
        >>> classifier.guess_category("Tahini Hulled")
        'Groceries'
    """

    def __init__(self, categories: Sequence[Tuple[str, Sequence[str]]] = None):
        if categories is None:
            categories = self._load_categories()
        self.categories = [
            (name, tuple(keyword.lower() for keyword in keywords))
            for name, keywords in categories
        ]
        self.default_category = get_config("extraction.default_category", DEFAULT_CATEGORY)

    @staticmethod
    def _load_categories() -> List[Tuple[str, Tuple[str, ...]]]:
        configured: List[Dict[str, Any]] = get_config("extraction.categories", None)
        if not configured:
            return DEFAULT_CATEGORIES
        return [
            (entry['name'], tuple(entry.get('keywords') or ()))
            for entry in configured
            if entry.get('name')
        ]

    def guess_category(self, name: str) -> str:
        """
        Return the first category with a keyword in the name.

        Args:
            name: Product name, any case.

        Returns:
            Category name, or the default category when nothing hits.
        """
        lowered = (name or '').lower()
        for category, keywords in self.categories:
            if any(keyword in lowered for keyword in keywords):
                return category
        return self.default_category
