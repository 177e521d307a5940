"""Plant catalog: the known plants offered for weekly tracking."""

from __future__ import annotations

from tracker.errors import DuplicateError, EmptyNameError
from tracker.models import UNCATEGORIZED, Plant, normalize_name


# ── Built-in defaults ─────────────────────────────────────────

DEFAULT_PLANTS_BY_CATEGORY: dict[str, tuple[str, ...]] = {
    "Vegetables": (
        "Artichoke", "Arugula", "Asparagus", "Beetroot", "Bell Pepper",
        "Bok Choy", "Broccoli", "Brussels Sprouts", "Butternut Squash", "Cabbage",
        "Carrot", "Cauliflower", "Celery", "Chard", "Chili Pepper",
        "Collard Greens", "Courgette", "Cucumber", "Eggplant", "Fennel",
        "Garlic", "Green Beans", "Kale", "Leek", "Lettuce",
        "Mushroom", "Okra", "Onion", "Parsnip", "Peas",
        "Potato", "Pumpkin", "Radish", "Red Onion", "Spinach",
        "Spring Onion", "Sweet Potato", "Sweetcorn", "Tomato", "Turnip",
    ),
    "Fruits": (
        "Apple", "Apricot", "Avocado", "Banana", "Blackberry",
        "Blueberry", "Cherry", "Coconut", "Cranberry", "Date",
        "Fig", "Grape", "Grapefruit", "Kiwi", "Lemon",
        "Lime", "Passion Fruit", "Melon", "Nectarine", "Orange",
        "Papaya", "Peach", "Pear", "Pineapple", "Plum",
        "Pomegranate", "Raspberry", "Strawberry", "Tangerine", "Watermelon",
    ),
    "Legumes": (
        "Black Beans", "Black-eyed Peas", "Broad Beans", "Butter Beans",
        "Cannellini Beans", "Chickpeas", "Edamame", "Kidney Beans",
        "Lentils", "Mung Beans", "Pinto Beans", "Soybeans",
    ),
    "Whole Grains": (
        "Barley", "Brown Rice", "Buckwheat", "Bulgur", "Millet",
        "Oats", "Quinoa", "Rye", "Spelt", "Wild Rice",
    ),
    "Nuts & Seeds": (
        "Almond", "Brazil Nut", "Cashew", "Chia Seeds", "Flaxseed",
        "Hazelnut", "Hemp Seeds", "Peanut", "Pecan", "Pistachio",
        "Pumpkin Seeds", "Sesame Seeds", "Sunflower Seeds", "Walnut",
    ),
    "Herbs & Spices": (
        "Basil", "Cinnamon", "Coriander", "Cumin", "Dill", "Ginger",
        "Mint", "Oregano", "Parsley", "Rosemary", "Thyme", "Turmeric",
    ),
}

CATEGORIES: tuple[str, ...] = tuple(DEFAULT_PLANTS_BY_CATEGORY)

_DEFAULT_CATEGORY_BY_NAME: dict[str, str] = {
    normalize_name(name): category
    for category, names in DEFAULT_PLANTS_BY_CATEGORY.items()
    for name in names
}


def default_plants() -> list[Plant]:
    """Fresh copy of the built-in plant list."""
    return [
        Plant(name=name, category=category)
        for category, names in DEFAULT_PLANTS_BY_CATEGORY.items()
        for name in names
    ]


def lookup_category(name: str) -> str | None:
    """Category of a built-in plant, ignoring case and surrounding space.

    Only the built-in list is consulted, never a live catalog.
    """
    return _DEFAULT_CATEGORY_BY_NAME.get(normalize_name(name))


# ── Catalog ───────────────────────────────────────────────────


class PlantCatalog:
    """Ordered plants with unique case-insensitive names."""

    def __init__(self, plants: list[Plant] | None = None) -> None:
        self._plants: list[Plant] = []
        self._index: dict[str, Plant] = {}
        self.version = 0
        for plant in plants or []:
            self.add_plant(plant.name, plant.category)
        self.version = 0

    @classmethod
    def defaults(cls) -> PlantCatalog:
        return cls(default_plants())

    def __len__(self) -> int:
        return len(self._plants)

    def __iter__(self):
        return iter(list(self._plants))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_name(name) in self._index

    @property
    def plants(self) -> list[Plant]:
        return list(self._plants)

    def names(self) -> list[str]:
        return [p.name for p in self._plants]

    def find(self, name: str) -> Plant | None:
        return self._index.get(normalize_name(name))

    def add_plant(self, name: str, category: str | None = None) -> Plant:
        """Insert a plant. Raises EmptyNameError or DuplicateError."""
        trimmed = (name or "").strip()
        if not trimmed:
            raise EmptyNameError("Plant name is empty")
        existing = self.find(trimmed)
        if existing is not None:
            raise DuplicateError(trimmed, existing.name)
        plant = Plant(name=trimmed, category=(category or "").strip() or UNCATEGORIZED)
        self._plants.append(plant)
        self._index[plant.key] = plant
        self.version += 1
        return plant

    def remove_plant(self, name: str) -> bool:
        """Drop a plant from the catalog. Tracking history is left alone."""
        plant = self._index.pop(normalize_name(name), None)
        if plant is None:
            return False
        self._plants.remove(plant)
        self.version += 1
        return True

    def reset_to_defaults(self) -> None:
        """Replace every entry with the built-in list."""
        self._plants = default_plants()
        self._index = {p.key: p for p in self._plants}
        self.version += 1

    def by_category(self) -> dict[str, list[Plant]]:
        """Plants grouped by category: built-in categories first, then the rest alphabetically."""
        groups: dict[str, list[Plant]] = {}
        for plant in self._plants:
            groups.setdefault(plant.category, []).append(plant)
        extra = sorted(c for c in groups if c not in CATEGORIES and c != UNCATEGORIZED)
        order = [c for c in CATEGORIES if c in groups] + extra
        if UNCATEGORIZED in groups:
            order.append(UNCATEGORIZED)
        return {c: sorted(groups[c], key=lambda p: p.name.casefold()) for c in order}

    def search(self, query: str) -> list[Plant]:
        q = normalize_name(query)
        if not q:
            return self.plants
        return [p for p in self._plants if q in p.key]

    def to_list(self) -> list[dict[str, str]]:
        return [p.to_dict() for p in self._plants]
