# tests/test_matching.py
from ats_portal.services.matching_service import KeywordMatcher, tokenize


def test_tokenize_keeps_symbol_runs():
    assert tokenize("Node.js developer, C++ and C#") == ["node.js", "developer", "c++", "and", "c#"]


def test_tokenize_lowercases_and_skips_leading_digits():
    assert tokenize("3 years of AWS/GCP") == ["years", "of", "aws", "gcp"]
    assert tokenize("") == []


def test_tokenize_trailing_dot_stays_in_token():
    # The character class includes "." so sentence-final words keep it
    assert tokenize("Python.") == ["python."]


def test_matched_skills_is_symmetric():
    matcher = KeywordMatcher()
    jd = "Looking for Python, Docker and Kubernetes experience; React a plus"
    resume = "Skills: python docker git react"
    assert matcher.matched_skills(jd, resume) == ["docker", "python", "react"]
    assert matcher.matched_skills(resume, jd) == matcher.matched_skills(jd, resume)


def test_matched_skills_equals_token_intersection_with_vocabulary():
    matcher = KeywordMatcher()
    jd = "c++ c# java go rust"
    resume = "java c# rust haskell"
    expected = set(tokenize(jd)) & set(tokenize(resume)) & matcher.skill_vocabulary
    assert set(matcher.matched_skills(jd, resume)) == expected == {"java", "c#"}


def test_injected_vocabulary():
    matcher = KeywordMatcher(skill_vocabulary=["Rust", "go"], resume_sections=["experience"])
    assert matcher.matched_skills("rust and go", "go, rust, python") == ["go", "rust"]


def test_is_resume_like_substring_gate():
    matcher = KeywordMatcher()
    assert matcher.is_resume_like("WORK HISTORY\nAcme")
    assert matcher.is_resume_like("my workflow notes")  # substring, by contract
    assert not matcher.is_resume_like("Grocery list: milk, eggs")
    assert not matcher.is_resume_like("")
