import re

import structlog

from ..errors import StoreFailure, ValidationFailure
from ..models import Budget, Category, Expense
from ..store import RecordStore

logger = structlog.get_logger(__name__)

HEX_COLOR_PATTERN = re.compile(r"^#?([0-9A-Fa-f]{6})$")

# Inserted on first run when the category table is empty
DEFAULT_CATEGORIES = [
    ("Food & Dining", "#FF6B6B"),
    ("Transportation", "#4ECDC4"),
    ("Shopping", "#45B7D1"),
    ("Entertainment", "#96CEB4"),
    ("Utilities", "#FFEAA7"),
    ("Healthcare", "#DDA0DD"),
    ("Education", "#98D8C8"),
    ("Other", "#F7DC6F"),
]


def normalize_color(color: str | None) -> str:
    """
    Normalize a hex color to uppercase #RRGGBB.

    Accepts 'ff6b6b', '#ff6b6b' and surrounding whitespace.
    """
    if color is None or not color.strip():
        raise ValidationFailure("Category color is required", field="color")
    match = HEX_COLOR_PATTERN.match(color.strip())
    if not match:
        raise ValidationFailure(f"Invalid hex color format: {color}", field="color")
    return f"#{match.group(1).upper()}"


def normalize_name(name: str | None) -> str:
    if name is None or not name.strip():
        raise ValidationFailure("Category name is required", field="name")
    return name.strip()


class CategoryService:
    def __init__(self, store: RecordStore):
        self.store = store

    def list_categories(self) -> list[Category]:
        return self.store.find_all(Category, order_by=(Category.name,))

    def get_category(self, category_id: int) -> Category | None:
        return self.store.find_by_id(Category, category_id)

    def get_category_by_name(self, name: str) -> Category | None:
        return self.store.find_one(Category, Category.name == name)

    def category_exists(self, name: str) -> bool:
        return self.get_category_by_name(name) is not None

    def create_category(self, name: str, color: str) -> Category:
        name = normalize_name(name)
        color = normalize_color(color)
        if self.category_exists(name):
            logger.warning("category_name_taken", name=name)
            raise ValidationFailure(f"Category name already exists: {name}", field="name")

        category = Category(name=name, color=color)
        if not self.store.save(category):
            raise StoreFailure("insert category")
        return category

    def update_category(
        self,
        category: Category,
        name: str | None = None,
        color: str | None = None,
    ) -> Category:
        # Validate everything before touching the record
        new_name = normalize_name(name) if name is not None else category.name
        new_color = normalize_color(color) if color is not None else category.color

        if new_name != category.name:
            existing = self.get_category_by_name(new_name)
            if existing is not None and existing.id != category.id:
                logger.warning("category_name_taken", name=new_name)
                raise ValidationFailure(f"Category name already exists: {new_name}", field="name")

        category.name = new_name
        category.color = new_color
        if not self.store.save(category):
            raise StoreFailure(f"update category {category.id}")
        return category

    def delete_category(self, category: Category) -> None:
        """
        Delete a category, leaving its expenses and budgets orphaned.

        Orphaned expenses stay in monthly expense listings (as "Unknown") but
        drop out of the per-category breakdown.
        """
        category_id = category.id
        orphaned_expenses = self.store.count(Expense, Expense.category_id == category_id)
        orphaned_budgets = self.store.count(Budget, Budget.category_id == category_id)

        if not self.store.delete(Category, category_id):
            raise StoreFailure(f"delete category {category_id}")

        if orphaned_expenses or orphaned_budgets:
            logger.info(
                "category_deleted_with_orphans",
                category_id=category_id,
                expenses=orphaned_expenses,
                budgets=orphaned_budgets,
            )

    def seed_defaults(self) -> int:
        """Insert the default categories if there are none. Returns how many were added."""
        if self.store.count(Category) > 0:
            return 0

        for name, color in DEFAULT_CATEGORIES:
            if not self.store.save(Category(name=name, color=color)):
                raise StoreFailure(f"seed category {name}")

        logger.info("seed_categories_inserted", count=len(DEFAULT_CATEGORIES))
        return len(DEFAULT_CATEGORIES)
