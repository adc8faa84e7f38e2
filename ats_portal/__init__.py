"""
Student ATS Portal
Student profiles, resume ATS scoring and course suggestions.

Architecture:
- MongoDB: user profiles and the latest analysis results
- LLM (OpenAI-compatible API): resume scoring and skill suggestions only
- Local keyword matcher: skill overlap computed without AI
"""

__version__ = "1.0.0"
