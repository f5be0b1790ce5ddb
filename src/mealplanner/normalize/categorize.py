"""Keyword-based shopping aisle categorization."""

import re

DEFAULT_CATEGORY = "Other"

DEFAULT_CATEGORIES: tuple[str, ...] = (
    "Produce",
    "Meat & Seafood",
    "Dairy & Eggs",
    "Bakery",
    "Frozen",
    "Canned Goods",
    "Condiments & Sauces",
    "Beverages",
    "Snacks & Treats",
    "Pantry",
    "Household",
    DEFAULT_CATEGORY,
)

# Evaluated in declaration order; see categorize_ingredient for tie-breaking
CATEGORY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "Produce": (
        "onion", "garlic", "tomato", "potato", "carrot", "celery", "lettuce", "spinach",
        "kale", "cabbage", "broccoli", "cauliflower", "bell pepper", "jalapeño",
        "cucumber", "zucchini", "squash", "eggplant", "mushroom", "avocado", "ginger",
        "apple", "banana", "orange", "lemon", "lime", "berry", "berries", "strawberry",
        "strawberries", "blueberry", "blueberries", "grape", "melon", "peach", "pear",
        "mango", "pineapple", "cilantro", "parsley", "basil", "thyme", "rosemary",
        "mint", "dill", "oregano", "sage", "arugula",
    ),
    "Meat & Seafood": (
        "chicken", "beef", "ground beef", "pork", "turkey", "ground turkey", "lamb",
        "steak", "bacon", "sausage", "ham", "fish", "salmon", "tuna", "shrimp", "crab",
        "lobster", "scallop", "cod", "tilapia", "mahi", "halibut", "swordfish", "anchovy",
    ),
    "Dairy & Eggs": (
        "milk", "cheese", "cheddar", "mozzarella", "parmesan", "feta", "goat cheese",
        "cream cheese", "cottage cheese", "ricotta", "butter", "margarine", "yogurt",
        "sour cream", "heavy cream", "whipping cream", "half and half", "egg", "cream",
    ),
    "Bakery": (
        "bread", "bun", "roll", "bagel", "english muffin", "tortilla", "pita", "naan",
        "croissant", "baguette", "sourdough", "rye", "ciabatta", "focaccia", "flatbread",
    ),
    "Frozen": (
        "frozen", "ice cream", "popsicle", "frozen pizza", "frozen vegetable",
        "frozen fruit", "frozen fries",
    ),
    "Canned Goods": (
        "canned", "black beans", "kidney beans", "chickpeas", "refried beans", "corn",
        "green beans", "tomato sauce", "tomato paste", "diced tomatoes",
        "crushed tomatoes", "coconut milk", "evaporated milk", "condensed milk",
        "broth", "stock", "soup", "olive",
    ),
    "Condiments & Sauces": (
        "ketchup", "mustard", "mayonnaise", "mayo", "relish", "hot sauce", "sriracha",
        "soy sauce", "worcestershire", "bbq sauce", "barbecue", "teriyaki", "salsa",
        "guacamole", "hummus", "ranch", "vinegar", "balsamic", "oil", "olive oil",
        "vegetable oil", "sesame oil", "salad dressing", "vinaigrette", "fish sauce",
        "oyster sauce",
    ),
    "Beverages": (
        "water", "sparkling water", "soda", "juice", "coffee", "tea", "beer", "wine",
        "vodka", "rum", "whiskey", "gin", "tequila", "seltzer", "lemonade", "kombucha",
        "almond milk", "oat milk", "soy milk",
    ),
    "Snacks & Treats": (
        "chips", "crackers", "pretzels", "popcorn", "nuts", "almonds", "peanuts",
        "cashews", "trail mix", "granola bar", "candy", "chocolate", "cookies",
        "cake", "brownies", "donuts", "muffin", "pudding", "gummies",
    ),
    "Pantry": (
        "rice", "pasta", "noodle", "spaghetti", "macaroni", "penne", "quinoa", "couscous",
        "flour", "sugar", "brown sugar", "honey", "maple syrup", "agave", "salt",
        "pepper", "black pepper", "spice", "cinnamon", "paprika", "cumin",
        "chili powder", "garlic powder", "onion powder", "cayenne", "turmeric",
        "nutmeg", "vanilla", "extract", "baking soda", "baking powder", "yeast",
        "cornstarch", "breadcrumbs", "panko", "oats", "cereal", "granola",
        "peanut butter", "jam", "jelly", "tahini", "taco shells",
    ),
    "Household": (
        "paper towel", "toilet paper", "tissue", "napkin", "foil", "aluminum foil",
        "plastic wrap", "wax paper", "parchment paper", "trash bag", "garbage bag",
        "sponge", "dish soap", "detergent", "laundry", "bleach", "cleaner",
        "disinfectant", "soap", "shampoo", "toothpaste", "deodorant",
    ),
}


def _keyword_pattern(keyword: str) -> re.Pattern[str]:
    # Whole words only, allowing a plural suffix ("egg" matches "eggs")
    return re.compile(rf"\b{re.escape(keyword)}(?:e?s)?\b")


_KEYWORD_PATTERNS: list[tuple[str, str, re.Pattern[str]]] = [
    (category, keyword, _keyword_pattern(keyword))
    for category, keywords in CATEGORY_KEYWORDS.items()
    for keyword in keywords
]

# Shorter names are too ambiguous to look up inside a keyword
_MIN_REVERSE_MATCH_LENGTH = 3


def categorize_ingredient(name: str) -> str:
    """
    Assign a shopping aisle category to an ingredient name.

    A keyword matches when it occurs in the name as a whole word. The
    longest matching keyword wins, so "peanut butter" lands in Pantry rather
    than Dairy; ties go to the category declared first. A name that matches
    no keyword falls back to the first keyword containing the whole name
    ("heavy" -> "heavy cream"), then to "Other".
    """
    normalized = " ".join(name.lower().split()) if name else ""
    if not normalized:
        return DEFAULT_CATEGORY

    best_category = DEFAULT_CATEGORY
    best_length = 0
    for category, keyword, pattern in _KEYWORD_PATTERNS:
        if len(keyword) > best_length and pattern.search(normalized):
            best_category = category
            best_length = len(keyword)

    if best_length or len(normalized) < _MIN_REVERSE_MATCH_LENGTH:
        return best_category

    reverse = re.compile(rf"\b{re.escape(normalized)}\b")
    for category, keyword, _ in _KEYWORD_PATTERNS:
        if reverse.search(keyword):
            return category

    return DEFAULT_CATEGORY


def categorize_many(names: list[str]) -> dict[str, str]:
    """Categorize several names, keyed by the name as given."""
    return {name: categorize_ingredient(name) for name in names}
