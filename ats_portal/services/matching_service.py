"""
Keyword Matching Service

Local, non-AI comparison of a resume and a job description:
1. Tokenize both texts
2. Keep only tokens found in the skill vocabulary
3. Intersect

No stemming, no weighting, no ordering by frequency. The vocabulary is
injected (from Settings by default) so it can grow without code changes.
"""

import re
from typing import FrozenSet, Iterable, List, Optional, Set

from ats_portal.core.config import get_settings


# Lowercase letter followed by letters, digits or . + # -
# so "c++", "c#" and "node.js" come through as single tokens.
TOKEN_PATTERN = re.compile(r"[a-z][a-z0-9.+#-]*")


def tokenize(text: str) -> List[str]:
    """Lowercase the text and return every maximal token run, in order."""
    if not text:
        return []
    return TOKEN_PATTERN.findall(text.lower())


class KeywordMatcher:
    """
    Resume-likeness gate and skill intersection over a fixed vocabulary.
    """

    def __init__(
        self,
        skill_vocabulary: Optional[Iterable[str]] = None,
        resume_sections: Optional[Iterable[str]] = None
    ):
        settings = get_settings()
        if skill_vocabulary is None:
            skill_vocabulary = settings.skill_vocabulary
        if resume_sections is None:
            resume_sections = settings.resume_sections
        self.skill_vocabulary: FrozenSet[str] = frozenset(s.lower() for s in skill_vocabulary)
        self.resume_sections: List[str] = [s.lower() for s in resume_sections]

    def is_resume_like(self, text: str) -> bool:
        """
        True if any section header word appears anywhere in the text.
        Substring match, so "workflow" counts for "work".
        """
        if not text:
            return False
        lowered = text.lower()
        return any(section in lowered for section in self.resume_sections)

    def skills_in(self, text: str) -> Set[str]:
        return {token for token in tokenize(text) if token in self.skill_vocabulary}

    def matched_skills(self, jd_text: str, resume_text: str) -> List[str]:
        """
        Recognized skills present in both texts, sorted.

        Symmetric: swapping the arguments gives the same result.
        """
        return sorted(self.skills_in(jd_text) & self.skills_in(resume_text))


def get_keyword_matcher() -> KeywordMatcher:
    return KeywordMatcher()
