"""Keyword-based food category classification."""

from collections.abc import Mapping
from types import MappingProxyType

from food_detection.domain.detection import FoodCategory

# Iteration order decides ties: the first category with a matching keyword wins.
CATEGORY_KEYWORDS: Mapping[FoodCategory, tuple[str, ...]] = MappingProxyType(
    {
        FoodCategory.VEGETABLES: (
            "carrot",
            "broccoli",
            "cabbage",
            "potato",
            "onion",
            "tomato",
            "lettuce",
            "pepper",
            "cucumber",
            "corn",
            "spinach",
            "celery",
            "eggplant",
            "zucchini",
            "mushroom",
            "pumpkin",
            "cauliflower",
        ),
        FoodCategory.FRUITS: (
            "apple",
            "banana",
            "orange",
            "grape",
            "strawberry",
            "watermelon",
            "mango",
            "pineapple",
            "lemon",
            "lime",
            "cherry",
            "peach",
            "pear",
            "kiwi",
            "papaya",
            "avocado",
            "melon",
            "berry",
        ),
        FoodCategory.MEAT_AND_FISH: (
            "chicken",
            "beef",
            "pork",
            "fish",
            "salmon",
            "shrimp",
            "turkey",
            "meat",
            "steak",
            "bacon",
            "sausage",
            "ham",
        ),
        FoodCategory.DAIRY: (
            "milk",
            "cheese",
            "yogurt",
            "butter",
            "cream",
            "ice cream",
            "mozzarella",
            "cheddar",
            "dairy",
        ),
        FoodCategory.GRAINS: (
            "bread",
            "rice",
            "pasta",
            "cereal",
            "noodle",
            "bagel",
            "tortilla",
            "cracker",
            "croissant",
            "muffin",
            "roll",
            "grain",
        ),
        FoodCategory.BEVERAGES: (
            "juice",
            "coffee",
            "tea",
            "soda",
            "wine",
            "beer",
            "smoothie",
            "latte",
            "drink",
            "beverage",
        ),
        FoodCategory.COOKED_FOOD: (
            "pizza",
            "burger",
            "sandwich",
            "soup",
            "salad",
            "fries",
            "hot dog",
            "burrito",
            "taco",
            "wrap",
            "curry",
            "stir fry",
            "fried",
        ),
    }
)


def categorize(label: str) -> FoodCategory:
    """Return the first category whose keyword occurs in the label."""
    lowered = label.lower()
    for category, keywords in CATEGORY_KEYWORDS.items():
        if any(keyword in lowered for keyword in keywords):
            return category
    return FoodCategory.OTHER
