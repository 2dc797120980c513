"""Schemas for the BMI calculator endpoint."""

from typing import List

from pydantic import BaseModel, Field


class BMIRequest(BaseModel):
    weight: float = Field(..., gt=0, le=500, examples=[65.0], description="Weight in kilograms")
    height: float = Field(..., gt=0, le=300, examples=[170.0], description="Height in centimeters")


class BMIResponse(BaseModel):
    bmi: float
    category: str
    recommendations: List[str]
