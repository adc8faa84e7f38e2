"""
LLM Client

Talks to any OpenAI-compatible chat endpoint through the openai library
(Gemini, DeepSeek and OpenAI all expose one).

MODEL SELECTION:
Which models a key can use depends on its tier and is not discoverable up
front, so candidates are probed in order with a tiny "Hello" completion:

    TryModel(0) -> ok -> Selected(model)
               \-> fail -> TryModel(1) -> ... -> NoModelAvailable

The winner is remembered on the client and reused until a real generation
with it fails; the next candidate is then selected and the prompt retried
once. Every call made for one request draws on a single deadline
(llm_total_timeout), and nothing is sent once it has passed.
"""

import json
import logging
import re
import time
from typing import Any, Iterable, List, Optional

from openai import OpenAI, OpenAIError

from ats_portal.core.config import get_settings
from ats_portal.core.errors import LLMTimeout, NoModelAvailable, UpstreamError

logger = logging.getLogger(__name__)


FENCE_PATTERN = re.compile(r"```(?:json)?", re.IGNORECASE)
QUOTED_PATTERN = re.compile(r'"([^"]+)"')


# ============================================================
# REPLY PARSING HELPERS
# ============================================================

def strip_code_fences(text: str) -> str:
    """Remove Markdown ``` / ```json markers wherever they appear."""
    return FENCE_PATTERN.sub("", text or "").strip()


def extract_json(text: str) -> Optional[Any]:
    """
    Parse a loosely formatted JSON reply.

    1. Strip code fences and parse directly
    2. Otherwise parse the span from the first "{" to the last "}"
    3. Otherwise give up and return None (callers substitute a fallback)
    """
    cleaned = strip_code_fences(text)
    try:
        return json.loads(cleaned)
    except ValueError:
        pass

    raw = text or ""
    start = raw.find("{")
    end = raw.rfind("}")
    if start != -1 and end > start:
        try:
            return json.loads(raw[start:end + 1])
        except ValueError:
            pass
    return None


def extract_string_list(text: str) -> List[str]:
    """
    Parse a reply that should be a JSON array of strings.
    A single-key wrapper such as {"skills": [...]} is unwrapped.
    Falls back to every double-quoted substring, then to [].
    """
    parsed = None
    try:
        parsed = json.loads(strip_code_fences(text))
    except ValueError:
        pass

    if isinstance(parsed, dict):
        lists = [value for value in parsed.values() if isinstance(value, list)]
        if len(lists) == 1:
            parsed = lists[0]
    if isinstance(parsed, list):
        return [str(item).strip() for item in parsed if str(item).strip()]
    return QUOTED_PATTERN.findall(text or "")


# ============================================================
# CLIENT
# ============================================================

class LLMClient:
    """
    Wrapper around the OpenAI SDK with ordered model fallback.
    """

    def __init__(
        self,
        client: OpenAI = None,
        models: List[str] = None,
        request_timeout: float = None,
        total_timeout: float = None
    ):
        settings = get_settings()
        self.client = client or OpenAI(
            api_key=settings.llm_api_key or "missing",
            base_url=settings.llm_base_url,
            max_retries=0
        )
        self.models = list(models if models is not None else settings.model_candidates)
        self.request_timeout = request_timeout or settings.llm_request_timeout
        self.total_timeout = total_timeout or settings.llm_total_timeout
        self.model: Optional[str] = None

    def _complete(self, model: str, prompt: str, max_tokens: int = None, timeout: float = None) -> str:
        """Single chat completion, returns the reply text."""
        kwargs = {}
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens
        response = self.client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            temperature=0.1,  # Low temp for consistent structured output
            timeout=timeout or self.request_timeout,
            **kwargs
        )
        return response.choices[0].message.content or ""

    def new_deadline(self) -> float:
        """Monotonic deadline for one request's worth of LLM calls."""
        return time.monotonic() + self.total_timeout

    def _remaining(self, deadline: float) -> float:
        return deadline - time.monotonic()

    def select_model(self, deadline: float = None, exclude: Iterable[str] = ()) -> str:
        """
        Return the first candidate that answers a trial generation.

        Raises:
            NoModelAvailable when every candidate failed or the time
            budget ran out
        """
        if self.model:
            return self.model

        if deadline is None:
            deadline = self.new_deadline()
        skipped = set(exclude)
        for name in self.models:
            if name in skipped:
                continue
            remaining = self._remaining(deadline)
            if remaining <= 0:
                logger.warning("Model selection budget exhausted before trying %s", name)
                break
            try:
                self._complete(name, "Hello", max_tokens=5, timeout=min(self.request_timeout, remaining))
            except OpenAIError as e:
                logger.warning("Model %s not available: %s", name, e)
                continue
            logger.info("Selected LLM model: %s", name)
            self.model = name
            return name

        raise NoModelAvailable()

    def _generate_once(self, model: str, prompt: str, max_tokens: int, deadline: float) -> str:
        remaining = self._remaining(deadline)
        if remaining <= 0:
            raise LLMTimeout()
        return self._complete(
            model, prompt, max_tokens=max_tokens, timeout=min(self.request_timeout, remaining)
        )

    def generate(self, prompt: str, max_tokens: int = None, deadline: float = None) -> str:
        """
        Generate with the selected model, selecting one first if needed.

        When the selected model fails, the next working candidate is
        selected and the prompt retried once. Every call made here shares
        `deadline` (a fresh llm_total_timeout budget when not given).
        """
        if deadline is None:
            deadline = self.new_deadline()

        model = self.select_model(deadline)
        try:
            return self._generate_once(model, prompt, max_tokens, deadline)
        except OpenAIError as e:
            logger.warning("Generation with %s failed, trying the next candidate: %s", model, e)
            self.model = None
            failed = e

        try:
            model = self.select_model(deadline, exclude=[model])
        except NoModelAvailable:
            raise UpstreamError(f"AI request failed: {failed}")

        try:
            return self._generate_once(model, prompt, max_tokens, deadline)
        except OpenAIError as e:
            logger.error("Generation with %s failed: %s", model, e)
            self.model = None
            raise UpstreamError(f"AI request failed: {e}")

    def generate_json(self, prompt: str, max_tokens: int = None, deadline: float = None) -> Optional[Any]:
        """Generate and parse a JSON reply; None when the reply is unparseable."""
        reply = self.generate(prompt, max_tokens=max_tokens, deadline=deadline)
        parsed = extract_json(reply)
        if parsed is None:
            logger.warning("Unparseable AI reply (%d chars)", len(reply))
        return parsed

    def test_connection(self) -> bool:
        """Test if any candidate model is reachable"""
        try:
            self.select_model()
            return True
        except NoModelAvailable:
            return False


# Singleton instance
_llm_client: LLMClient = None


def get_llm_client() -> LLMClient:
    """Get or create LLM client (singleton pattern)"""
    global _llm_client
    if _llm_client is None:
        _llm_client = LLMClient()
    return _llm_client
