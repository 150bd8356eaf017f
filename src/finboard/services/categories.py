"""Default spending categories and keyword categorization of transactions."""

from dataclasses import dataclass

from ..connectors.plaid_schemas import TransactionRecord


@dataclass(frozen=True)
class Category:
    """A dashboard category with its display attributes."""

    name: str
    icon: str
    color: str


DEFAULT_CATEGORIES: tuple[Category, ...] = (
    Category("Housing", "home", "#4A6FA5"),
    Category("Food & Dining", "utensils", "#FFA500"),
    Category("Transportation", "car", "#38B2AC"),
    Category("Entertainment", "film", "#805AD5"),
    Category("Shopping", "shopping-cart", "#F687B3"),
    Category("Utilities", "bolt", "#F56565"),
    Category("Healthcare", "heartbeat", "#48BB78"),
    Category("Education", "graduation-cap", "#ED8936"),
    Category("Personal Care", "cut", "#9F7AEA"),
    Category("Travel", "plane", "#667EEA"),
    Category("Gifts & Donations", "gift", "#FC8181"),
    Category("Investments", "chart-line", "#4FD1C5"),
    Category("Income", "dollar-sign", "#68D391"),
    Category("Taxes", "file-invoice-dollar", "#CBD5E0"),
    Category("Miscellaneous", "ellipsis-h", "#A0AEC0"),
)

# Checked in order; the first keyword found in the description wins
CATEGORY_KEYWORDS: dict[str, str] = {
    "rent": "Housing",
    "mortgage": "Housing",
    "apartment": "Housing",
    "housing": "Housing",
    "restaurant": "Food & Dining",
    "cafe": "Food & Dining",
    "grocery": "Food & Dining",
    "takeout": "Food & Dining",
    "food": "Food & Dining",
    "dining": "Food & Dining",
    "gas": "Transportation",
    "fuel": "Transportation",
    "car": "Transportation",
    "auto": "Transportation",
    "bus": "Transportation",
    "train": "Transportation",
    "uber": "Transportation",
    "lyft": "Transportation",
    "taxi": "Transportation",
    "movie": "Entertainment",
    "theatre": "Entertainment",
    "theater": "Entertainment",
    "concert": "Entertainment",
    "streaming": "Entertainment",
    "netflix": "Entertainment",
    "spotify": "Entertainment",
    "amazon": "Shopping",
    "walmart": "Shopping",
    "target": "Shopping",
    "store": "Shopping",
    "shopping": "Shopping",
    "purchase": "Shopping",
    "electric": "Utilities",
    "water": "Utilities",
    "gas bill": "Utilities",
    "utility": "Utilities",
    "internet": "Utilities",
    "phone": "Utilities",
    "mobile": "Utilities",
    "doctor": "Healthcare",
    "medical": "Healthcare",
    "clinic": "Healthcare",
    "hospital": "Healthcare",
    "pharmacy": "Healthcare",
    "prescription": "Healthcare",
    "school": "Education",
    "college": "Education",
    "university": "Education",
    "tuition": "Education",
    "course": "Education",
    "book": "Education",
    "salary": "Income",
    "paycheck": "Income",
    "income": "Income",
    "wage": "Income",
    "deposit": "Income",
    "refund": "Income",
    "other": "Miscellaneous",
    "misc": "Miscellaneous",
    "unknown": "Miscellaneous",
}


def find_category_by_name(name: str) -> Category | None:
    """Find a category whose name contains, or is contained in, ``name``.

    Matching is case-insensitive. Returns None for an empty name.
    """
    lower_name = name.strip().lower()
    if not lower_name:
        return None
    for category in DEFAULT_CATEGORIES:
        category_name = category.name.lower()
        if lower_name in category_name or category_name in lower_name:
            return category
    return None


def categorize_description(description: str) -> str | None:
    """Categorize free text by the first matching keyword."""
    lower_desc = description.lower()
    if not lower_desc:
        return None
    for keyword, category_name in CATEGORY_KEYWORDS.items():
        if keyword in lower_desc:
            return category_name
    return None


def categorize_transaction(transaction: TransactionRecord) -> str | None:
    """Pick a category for a Plaid transaction.

    The primary Plaid category is tried first, then the transaction
    description. Returns None when nothing matches (uncategorized).
    """
    if transaction.category:
        matched = find_category_by_name(transaction.category[0])
        if matched:
            return matched.name

    return categorize_description(transaction.description)
