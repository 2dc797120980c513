"""BMI calculation and categories."""

import pytest

from core.exceptions import ValidationError
from services.nutrition_calculator import BMI_RECOMMENDATIONS, nutrition_calculator


@pytest.mark.parametrize("weight,bmi,category", [
    (50, 17.3, "underweight"),
    (65, 22.5, "normal"),
    (80, 27.7, "overweight"),
    (95, 32.9, "obese"),
])
def test_assess_bmi_at_170cm(weight, bmi, category):
    result = nutrition_calculator.assess_bmi(weight, 170)
    assert result["bmi"] == bmi
    assert result["category"] == category
    assert result["recommendations"] == BMI_RECOMMENDATIONS[category]


@pytest.mark.parametrize("bmi,category", [
    (18.49, "underweight"),
    (18.5, "normal"),
    (24.99, "normal"),
    (25.0, "overweight"),
    (30.0, "obese"),
])
def test_category_boundaries(bmi, category):
    assert nutrition_calculator.bmi_category(bmi) == category


def test_each_category_has_three_or_four_suggestions():
    assert {k: len(v) for k, v in BMI_RECOMMENDATIONS.items()} == {
        "underweight": 4, "normal": 3, "overweight": 3, "obese": 4,
    }


def test_recommendations_are_copies():
    result = nutrition_calculator.assess_bmi(65, 170)
    result["recommendations"].append("mutated")
    assert "mutated" not in BMI_RECOMMENDATIONS["normal"]


@pytest.mark.parametrize("weight,height", [(0, 170), (-3, 170), (70, 0), (70, -1)])
def test_non_positive_inputs_are_rejected(weight, height):
    with pytest.raises(ValidationError) as exc_info:
        nutrition_calculator.assess_bmi(weight, height)
    assert exc_info.value.status_code == 400


@pytest.mark.parametrize("weight,bmi,category", [(72.24, 25.0, "overweight"), (53.44, 18.5, "normal")])
def test_category_matches_the_reported_bmi(weight, bmi, category):
    result = nutrition_calculator.assess_bmi(weight, 170)
    assert result["bmi"] == bmi
    assert result["category"] == category
