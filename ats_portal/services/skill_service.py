"""
Skill Suggestion Service

Asks the model for 5-7 skills, tools or frameworks for a free-text job
role. Reply parsing: JSON array -> quoted substrings -> [].
"""

import logging
from typing import List

from fastapi import Depends

from ats_portal.core.errors import MissingRole
from ats_portal.services.llm_client import LLMClient, extract_string_list, get_llm_client

logger = logging.getLogger(__name__)


SKILL_PROMPT = (
    'The job role is: "{role}". Suggest 5-7 technical skills, tools, or frameworks. '
    "Respond ONLY as a JSON array of strings."
)


class SkillSuggestionService:

    def __init__(self, ai_client: LLMClient = None):
        self.ai_client = ai_client or get_llm_client()

    def suggest_skills(self, role: str) -> List[str]:
        role = (role or "").strip()
        if not role:
            raise MissingRole()

        reply = self.ai_client.generate(SKILL_PROMPT.format(role=role))
        skills = extract_string_list(reply)
        if not skills:
            logger.warning("No skills parsed for role %r", role)
        return skills


def get_skill_service(ai_client: LLMClient = Depends(get_llm_client)) -> SkillSuggestionService:
    return SkillSuggestionService(ai_client=ai_client)
