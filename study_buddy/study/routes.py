"""Study content endpoints."""

from fastapi import APIRouter, Depends, Query

from study_buddy.auth.dependencies import CurrentUser, get_current_user
from study_buddy.study.content import get_academic_resources, get_starter_prompts, get_study_tips

router = APIRouter(prefix="/api/v1/study", tags=["Study"])


@router.get("/tips", summary="Study tips", description="General study tips, optionally narrowed to one category.")
async def tips(subject: str | None = Query(None), user: CurrentUser = Depends(get_current_user)):
    return {"status": "success", "data": get_study_tips(user, subject)}


@router.get("/resources", summary="Academic resources")
async def resources(user: CurrentUser = Depends(get_current_user)):
    return {"status": "success", "data": get_academic_resources(user)}


@router.get("/prompts", summary="Starter prompts", description="Quick prompts and sample questions for an empty conversation.")
async def prompts(user: CurrentUser = Depends(get_current_user)):
    return {"status": "success", "data": get_starter_prompts(user)}
