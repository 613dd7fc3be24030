# -*- coding: utf-8 -*-
"""Users — API endpoints."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, HTTPException

from .models import UserCreateRequest, UserDeleteResponse, UserPublic, UserUpdateRequest
from .storage import create_user, delete_user, get_user_by_email, list_users, update_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Users"])


@router.get("/getUser", response_model=List[UserPublic], summary="List all users")
def get_users():
    return [UserPublic.model_validate(u) for u in list_users()]


@router.get("/getUser/{email}", response_model=UserPublic, summary="Get a user by email")
def get_user(email: str):
    user = get_user_by_email(email)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return UserPublic.model_validate(user)


@router.post("/createUser", response_model=UserPublic, status_code=201, summary="Create a user")
def create(request: UserCreateRequest):
    if get_user_by_email(request.email):
        raise HTTPException(status_code=400, detail="User with this email already exists")
    user = create_user(request)
    logger.info("Created user %s", user["email"])
    return UserPublic.model_validate(user)


@router.put("/updateUser/{email}", response_model=UserPublic, summary="Update a user")
def update(email: str, request: UserUpdateRequest):
    current_email = email.lower().strip()
    if request.email and request.email != current_email and get_user_by_email(request.email):
        raise HTTPException(status_code=400, detail="Email already exists")

    user = update_user(current_email, request)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return UserPublic.model_validate(user)


@router.delete("/deleteUser/{email}", response_model=UserDeleteResponse, summary="Delete a user")
def delete(email: str):
    if not delete_user(email):
        raise HTTPException(status_code=404, detail="User not found")
    logger.info("Deleted user %s", email.lower().strip())
    return UserDeleteResponse(message="User deleted successfully")
