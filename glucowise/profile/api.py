# -*- coding: utf-8 -*-
"""Profile — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ..auth.security import get_current_user
from .models import Goals, ProfileUpdateRequest, UserProfile
from .storage import effective_goals, get_profile, update_goals, update_profile

router = APIRouter(prefix="/api/profile", tags=["Profile"])


@router.get("", response_model=UserProfile, summary="Get the current user's profile")
def read_profile(user: dict = Depends(get_current_user)):
    return get_profile(user)


@router.put("", response_model=UserProfile, summary="Update demographics, activity level and blood sugar")
def write_profile(request: ProfileUpdateRequest, user: dict = Depends(get_current_user)):
    return update_profile(user, request)


@router.get("/goals", response_model=Goals, summary="Health goals (daily targets filled with defaults)")
def read_goals(user: dict = Depends(get_current_user)):
    return effective_goals(user["id"])


@router.put("/goals", response_model=Goals, summary="Set health goals")
def write_goals(request: Goals, user: dict = Depends(get_current_user)):
    update_goals(user["id"], request)
    return effective_goals(user["id"])
