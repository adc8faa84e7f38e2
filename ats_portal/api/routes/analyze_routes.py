"""
Resume Analysis Routes

POST /analyze        - Resume (PDF) vs. pasted job description
POST /analyze-auto   - Resume (PDF) scored ATS-style on its own
POST /suggest-skills - 5-7 skills for a job role

Failures come back with a real status code and a body of
{"detail": "...", "error": "..."}.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from starlette.concurrency import run_in_threadpool

from ats_portal.core.config import get_settings
from ats_portal.schemas.schemas import AtsAnalysis, MatchAnalysis, SkillSuggestionRequest
from ats_portal.services.analysis_service import ResumeAnalysisService, get_analysis_service
from ats_portal.services.skill_service import SkillSuggestionService, get_skill_service
from ats_portal.services.user_service import UserService, get_user_service
from ats_portal.utils.file_upload import read_pdf_upload

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Analysis"])


def _should_persist(user_id: Optional[str]) -> bool:
    return bool(user_id) and get_settings().persist_analysis_results


@router.post("/analyze", response_model=MatchAnalysis)
async def analyze(
    resume: Optional[UploadFile] = File(None, description="Resume PDF"),
    jd: str = Form(""),
    user_id: Optional[str] = Form(None),
    analyzer: ResumeAnalysisService = Depends(get_analysis_service),
    users: UserService = Depends(get_user_service)
):
    """
    Compare a resume against a job description.

    Process:
    1. Validate upload (PDF only) and extract text
    2. Local resume-likeness gate, then AI resume check
    3. AI match score, missing keywords and summary
    4. Locally matched skill keywords merged in
    """
    content = await read_pdf_upload(resume)
    resume_text = await run_in_threadpool(analyzer.resume_text_from_pdf, content)
    result = await run_in_threadpool(analyzer.analyze_with_jd, resume_text, jd)

    if _should_persist(user_id):
        await run_in_threadpool(users.save_analysis, user_id, result["match"])
    return result


@router.post("/analyze-auto", response_model=AtsAnalysis)
async def analyze_auto(
    resume: Optional[UploadFile] = File(None, description="Resume PDF"),
    user_id: Optional[str] = Form(None),
    analyzer: ResumeAnalysisService = Depends(get_analysis_service),
    users: UserService = Depends(get_user_service)
):
    """
    ATS-style analysis without a job description.

    The top of the resume (profile/objective) stands in for the job focus.
    """
    content = await read_pdf_upload(resume)
    resume_text = await run_in_threadpool(analyzer.resume_text_from_pdf, content)
    result = await run_in_threadpool(analyzer.analyze_auto, resume_text)

    if _should_persist(user_id):
        await run_in_threadpool(
            users.save_analysis, user_id, result["match"], result["strengths"], result["weaknesses"]
        )
    return result


@router.post("/suggest-skills", response_model=List[str])
async def suggest_skills(
    request: SkillSuggestionRequest,
    suggester: SkillSuggestionService = Depends(get_skill_service)
):
    """Skills to learn for a job role, as a plain JSON array."""
    return await run_in_threadpool(suggester.suggest_skills, request.role)
