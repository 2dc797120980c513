"""Nutrition calculation helpers.

BMI computation and the advisory text attached to each BMI category. Pure
functions, no I/O.
"""

from typing import Dict, List, Tuple, Union
from core.exceptions import ValidationError
from core.logger import get_logger

logger = get_logger("services.nutrition_calculator")

# (upper bound exclusive, category); the last category has no upper bound
BMI_CATEGORIES: Tuple[Tuple[float, str], ...] = (
    (18.5, "underweight"),
    (25.0, "normal"),
    (30.0, "overweight"),
)

BMI_RECOMMENDATIONS: Dict[str, List[str]] = {
    "underweight": [
        "Consider consulting with a nutritionist for healthy weight gain strategies",
        "Focus on nutrient-dense, calorie-rich foods",
        "Include healthy fats like nuts, avocado, and olive oil",
        "Include protein-rich meals in your diet",
    ],
    "normal": [
        "Maintain your current healthy weight with balanced nutrition",
        "Continue regular physical activity",
        "Focus on variety in your meal choices",
    ],
    "overweight": [
        "Consider portion control and balanced meal planning",
        "Increase physical activity and choose lower-calorie options",
        "Focus on vegetables, lean proteins, and whole grains",
    ],
    "obese": [
        "Consult with healthcare professionals for a comprehensive weight management plan",
        "Focus on sustainable lifestyle changes",
        "Prioritize nutrient-dense, lower-calorie meal options",
        "Consider working with a registered dietitian",
    ],
}


class NutritionCalculator:
    """Class-based nutrition calculator used across the app."""

    def calculate_bmi(self, height_cm: float, weight_kg: float) -> float:
        """Calculate BMI from height in cm and weight in kg."""
        h_m = height_cm / 100.0
        if h_m <= 0:
            return 0.0
        return weight_kg / (h_m * h_m)

    def bmi_category(self, bmi: float) -> str:
        for upper, category in BMI_CATEGORIES:
            if bmi < upper:
                return category
        return "obese"

    def assess_bmi(self, weight_kg: float, height_cm: float) -> Dict[str, Union[float, str, List[str]]]:
        """Return the rounded BMI, its category and matching suggestions.

        The category is decided on the rounded value, so the reported BMI
        and its category always agree.

        Raises:
            ValidationError: If weight or height is not positive.
        """
        if weight_kg is None or weight_kg <= 0:
            raise ValidationError("Valid weight and height are required", field="weight")
        if height_cm is None or height_cm <= 0:
            raise ValidationError("Valid weight and height are required", field="height")
        bmi = round(self.calculate_bmi(height_cm, weight_kg), 1)
        category = self.bmi_category(bmi)
        logger.debug("BMI %.1f -> %s", bmi, category)
        return {
            "bmi": bmi,
            "category": category,
            "recommendations": list(BMI_RECOMMENDATIONS[category]),
        }


# export singleton
nutrition_calculator = NutritionCalculator()
__all__ = ["NutritionCalculator", "nutrition_calculator"]
