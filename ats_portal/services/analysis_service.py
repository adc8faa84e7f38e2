"""
Resume Analysis Service

Two request shapes:

1. Explicit JD (/analyze)
   PDF -> text -> local gate -> AI "is this a resume?" -> AI match/summary
   against the supplied JD -> merge locally computed match_keywords

2. Auto / ATS (/analyze-auto)
   PDF -> text -> local gate -> AI scores the resume against its own top
   section (first 500 characters) -> strengths / weaknesses

A malformed AI reply never fails the request: it degrades to a zeroed,
correctly shaped result.
"""

import logging
from typing import Any, List

from fastapi import Depends

from ats_portal.core.errors import EmptyOrUnreadablePDF, NotResumeLike
from ats_portal.services.llm_client import LLMClient, get_llm_client
from ats_portal.services.matching_service import KeywordMatcher, get_keyword_matcher
from ats_portal.services.user_service import clamp_score
from ats_portal.utils.file_upload import extract_pdf_text

logger = logging.getLogger(__name__)


RESUME_CHECK_CHARS = 2000
TOP_SECTION_CHARS = 500
FAILED_SUMMARY = "Analysis failed, empty response."


RESUME_CHECK_PROMPT = """Does the following text appear to be a resume (CV)?
Answer only with "yes" or "no".

Text:
{text}
"""

MATCH_PROMPT = """Compare this resume against the job description.

Resume:
{resume_text}

Job Description:
{jd_text}

Respond ONLY in JSON with:
{{
  "match": <percentage number between 0 and 100>,
  "missing_keywords": [ "keyword1", "keyword2", ... ],
  "summary": "short summary"
}}
"""

ATS_PROMPT = """You are an ATS system. Analyze the following resume.
Use the top section (profile/objective/summary) as the job focus.

Resume Top Section:
{top_section}

Full Resume:
{resume_text}

Respond ONLY in JSON with:
{{
  "match": <percentage number between 0 and 100>,
  "strengths": ["skill1", "skill2", ...],
  "weaknesses": ["area1", "area2", ...],
  "summary": "short professional summary"
}}
"""


# ============================================================
# JSON VALIDATION HELPERS
# ============================================================

def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if item is not None and str(item).strip()]


def validate_match_result(data: Any, match_keywords: List[str]) -> dict:
    if not isinstance(data, dict):
        return {
            "match": 0,
            "missing_keywords": [],
            "match_keywords": [],
            "summary": FAILED_SUMMARY
        }
    return {
        "match": clamp_score(data.get("match", 0)),
        "missing_keywords": _string_list(data.get("missing_keywords")),
        "match_keywords": match_keywords,
        "summary": str(data.get("summary") or "")
    }


def validate_ats_result(data: Any) -> dict:
    if not isinstance(data, dict):
        return {
            "match": 0,
            "strengths": [],
            "weaknesses": [],
            "summary": FAILED_SUMMARY
        }
    return {
        "match": clamp_score(data.get("match", 0)),
        "strengths": _string_list(data.get("strengths")),
        "weaknesses": _string_list(data.get("weaknesses")),
        "summary": str(data.get("summary") or "")
    }


def is_negative_answer(reply: str) -> bool:
    """True when a yes/no reply starts with "no"."""
    words = (reply or "").strip().lower().split()
    return bool(words) and words[0].strip('."!,') == "no"


# ============================================================
# ANALYSIS SERVICE
# ============================================================

class ResumeAnalysisService:
    """
    Runs both analysis modes on top of an LLM client and a keyword matcher.
    """

    def __init__(self, ai_client: LLMClient = None, matcher: KeywordMatcher = None):
        self.ai_client = ai_client or get_llm_client()
        self.matcher = matcher or get_keyword_matcher()

    def resume_text_from_pdf(self, content: bytes) -> str:
        """
        Extract text and apply the cheap local gate.

        Raises:
            ExtractionError, EmptyOrUnreadablePDF, NotResumeLike
        """
        text = extract_pdf_text(content)
        if not text.strip():
            raise EmptyOrUnreadablePDF()
        if not self.matcher.is_resume_like(text):
            raise NotResumeLike()
        return text

    def confirm_resume(self, resume_text: str, deadline: float = None) -> None:
        """Second gate: ask the model whether the text is a resume."""
        reply = self.ai_client.generate(
            RESUME_CHECK_PROMPT.format(text=resume_text[:RESUME_CHECK_CHARS]),
            deadline=deadline
        )
        if not reply.strip():
            logger.warning("Empty reply to the resume check, treating it as inconclusive")
            return
        if is_negative_answer(reply):
            raise NotResumeLike("The uploaded file does not look like a resume.")

    def analyze_with_jd(self, resume_text: str, jd_text: str) -> dict:
        """
        Score a resume against a job description.

        Both model calls share one deadline.

        Returns:
            {"match", "missing_keywords", "match_keywords", "summary"}
        """
        deadline = self.ai_client.new_deadline()
        jd_text = (jd_text or "").lower()
        self.confirm_resume(resume_text, deadline=deadline)

        data = self.ai_client.generate_json(
            MATCH_PROMPT.format(resume_text=resume_text, jd_text=jd_text),
            deadline=deadline
        )
        if data is None:
            # No keyword merge on a failed reply
            return validate_match_result(None, [])

        return validate_match_result(data, self.matcher.matched_skills(jd_text, resume_text))

    def analyze_auto(self, resume_text: str) -> dict:
        """
        Score a resume against the focus stated in its own top section.

        Returns:
            {"match", "strengths", "weaknesses", "summary"}
        """
        data = self.ai_client.generate_json(
            ATS_PROMPT.format(
                top_section=resume_text[:TOP_SECTION_CHARS],
                resume_text=resume_text
            )
        )
        return validate_ats_result(data)


def get_analysis_service(ai_client: LLMClient = Depends(get_llm_client)) -> ResumeAnalysisService:
    """Get analysis service instance (FastAPI dependency)."""
    return ResumeAnalysisService(ai_client=ai_client)
