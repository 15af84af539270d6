"""Row and document mapping shared by the storage adapters."""

from nibble.domain.foods import FoodItem


def food_to_record(food: FoodItem) -> dict[str, object]:
    """Map a food to its stored column names."""
    return {
        "id": food.id,
        "name": food.name,
        "calories": food.calories,
        "protein": food.protein_g,
        "carbs": food.carbs_g,
        "fat": food.fat_g,
        "weight": food.weight_g,
        "timestamp": food.timestamp,
    }


def food_from_record(row: dict[str, object]) -> FoodItem:
    """Build a food from a stored row, tolerating missing numeric columns."""
    return FoodItem(
        id=str(row.get("id", "")),
        name=str(row.get("name", "")),
        calories=float(row.get("calories") or 0.0),
        protein_g=float(row.get("protein") or 0.0),
        carbs_g=float(row.get("carbs") or 0.0),
        fat_g=float(row.get("fat") or 0.0),
        weight_g=float(row.get("weight") or 0.0),
        timestamp=int(row.get("timestamp") or 0),
    )
