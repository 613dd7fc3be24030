# -*- coding: utf-8 -*-
"""Users — Pydantic models."""

from __future__ import annotations

import re
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

EMAIL_PATTERN = re.compile(r"^\w+(?:[.-]\w+)*@\w+(?:[.-]\w+)*(?:\.\w{2,3})+$")
DEFAULT_AVATAR = "avator1.jpeg"


class PrimaryGoal(str, Enum):
    weight_loss = "weight_loss"
    muscle_gain = "muscle_gain"
    control_diet = "control_diet"
    fitness = "fitness"


class ActivityLevel(str, Enum):
    sedentary = "sedentary"
    light = "light"
    moderate = "moderate"
    very = "very"


class MealFrequency(str, Enum):
    two = "2"
    three = "3"
    four_plus = "4+"


class DietType(str, Enum):
    vegetarian = "vegetarian"
    vegan = "vegan"
    keto = "keto"
    balanced = "balanced"
    paleo = "paleo"
    other = "other"


class Allergy(str, Enum):
    none = "none"
    nuts = "nuts"
    gluten = "gluten"
    dairy = "dairy"
    soy = "soy"
    seafood = "seafood"
    multiple = "multiple"


def _normalize_email(value: object) -> object:
    if not isinstance(value, str):
        return value
    email = value.strip().lower()
    if not EMAIL_PATTERN.match(email):
        raise ValueError("Please enter a valid email")
    return email


class UserProfileFields(BaseModel):
    """Optional personal, lifestyle and dietary details collected during onboarding."""

    full_name: Optional[str] = Field(None, max_length=100)
    age: Optional[int] = Field(None, ge=13, le=120)
    gender: Optional[str] = Field(None, max_length=32)
    height_cm: Optional[float] = Field(None, ge=100, le=250)
    weight_kg: Optional[float] = Field(None, ge=30, le=300)
    primary_goal: Optional[PrimaryGoal] = None
    activity_level: Optional[ActivityLevel] = None
    average_sleep: Optional[float] = Field(None, ge=4, le=16, description="Hours per day")
    water_intake: Optional[float] = Field(None, ge=0.5, le=10, description="Liters per day")
    meal_frequency: Optional[MealFrequency] = None
    diet_type: Optional[DietType] = None
    allergies: Optional[List[Allergy]] = None
    dietary_notes: Optional[str] = Field(None, max_length=500)
    username: Optional[str] = Field(None, min_length=1, max_length=64)
    target_weight: Optional[float] = Field(None, ge=30, le=300)

    @field_validator("full_name", "gender", "dietary_notes", "username", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class UserCreateRequest(UserProfileFields):
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=6, max_length=128)
    profile_name: str = Field(..., min_length=1, max_length=50)

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, value: object) -> object:
        return _normalize_email(value)

    @field_validator("profile_name", mode="before")
    @classmethod
    def _profile_name(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class UserUpdateRequest(UserProfileFields):
    email: Optional[str] = Field(None, min_length=3, max_length=254)
    password: Optional[str] = Field(None, min_length=6, max_length=128)
    profile_name: Optional[str] = Field(None, min_length=1, max_length=50)
    avatar: Optional[str] = Field(None, min_length=1, max_length=200)

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, value: object) -> object:
        if value is None:
            return None
        return _normalize_email(value)

    @field_validator("profile_name", mode="before")
    @classmethod
    def _profile_name(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class UserPublic(BaseModel):
    id: str
    email: str
    profile_name: str
    avatar: str = DEFAULT_AVATAR
    full_name: str = ""
    age: Optional[int] = None
    gender: str = ""
    height_cm: Optional[float] = None
    weight_kg: Optional[float] = None
    primary_goal: Optional[PrimaryGoal] = None
    activity_level: Optional[ActivityLevel] = None
    average_sleep: Optional[float] = None
    water_intake: Optional[float] = None
    meal_frequency: Optional[MealFrequency] = None
    diet_type: Optional[DietType] = None
    allergies: List[Allergy] = []
    dietary_notes: str = ""
    username: Optional[str] = None
    target_weight: Optional[float] = None
    bmi: Optional[float] = None
    start_date: str
    last_login: str
    created_at: str


class UserDeleteResponse(BaseModel):
    message: str
