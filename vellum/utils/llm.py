"""
LLM provider abstraction and response parsing utilities.

Backs the content enhancement context: one provider instance per enhancer,
one short system/user exchange per rewritten resume part. Transient provider
errors (overload, rate limits) are retried with exponential backoff; parsing
helpers recover JSON arrays and objects from chatty model output.

Configuration (environment, .env supported):
    LLM_PROVIDER       "anthropic" or "openai" (default: openai)
    LLM_MODEL          Model override for the selected provider
    LLM_MAX_RETRIES    Attempts before a transient error is re-raised (default: 5)
    LLM_TEMPERATURE    Sampling temperature for rewrites (default: 0.3)
"""

import json
import os
import re
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import partial
from typing import Callable, Optional, TypeVar

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

MAX_RETRIES = int(os.getenv("LLM_MAX_RETRIES", "5"))
BASE_DELAY = 1.0

# Rewritten bullet lists can run long
MAX_OUTPUT_TOKENS = 4096
DEFAULT_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.3"))

DEFAULT_MODELS = {
    "anthropic": "claude-sonnet-4-20250514",
    "openai": "gpt-4o",
}

T = TypeVar("T")


def _retry_with_backoff(
    operation: Callable[[], T],
    retryable_exception: type[Exception],
    error_message: str,
    max_retries: int = MAX_RETRIES,
) -> T:
    """
    Execute operation with exponential backoff retry on specific exception.

    Args:
        operation: Callable that performs the API request and returns result
        retryable_exception: Exception type that triggers retry
        error_message: Message prefix for retry logging (e.g., "API overloaded")
        max_retries: Total attempts before the exception propagates
    """
    for attempt in range(max_retries):
        try:
            return operation()
        except retryable_exception:
            if attempt == max_retries - 1:
                raise
            delay = BASE_DELAY * (2**attempt)
            logger.warning(
                f"{error_message}, retrying in {delay:.1f}s (attempt {attempt + 1}/{max_retries})"
            )
            time.sleep(delay)


# --- LLM Provider Classes ---


@dataclass
class LLMResponse:
    """Response from an LLM provider."""

    content: str
    model: str
    input_tokens: int
    output_tokens: int

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


class LLMProvider(ABC):
    """
    Abstract base for LLM providers.

    Subclasses must:
    - Set _provider_prefix class attribute (e.g., "anthropic", "openai")
    - Set self._retryable_exception to the exception type that triggers retry
    - Set self._retry_message for logging during retries
    - Implement _call_api() for the actual API call
    - Call update_model(model) in __init__ to set model and name
    """

    _provider_prefix: str
    _retryable_exception: type[Exception]
    _retry_message: str

    name: str
    model: str
    temperature: float = DEFAULT_TEMPERATURE

    def update_model(self, model: str):
        """Update the model and refresh the provider name."""
        self.model = model
        self.name = f"{self._provider_prefix}/{model}"

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """Make a single API call (no retries). Implemented by subclasses."""
        pass

    def generate(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """Generate a response from the LLM with automatic retry on transient errors."""
        return _retry_with_backoff(
            partial(self._call_api, system_prompt, user_prompt),
            self._retryable_exception,
            f"{self.name}: {self._retry_message}",
        )


class AnthropicProvider(LLMProvider):
    """Anthropic Claude provider with exponential backoff retry."""

    _provider_prefix = "anthropic"
    _retry_message = "API overloaded"

    def __init__(self, model: str = DEFAULT_MODELS["anthropic"]):
        # Lazy import - the SDK is only needed when enhancement is requested
        try:
            import anthropic
        except ImportError:
            raise ImportError("anthropic package required. Install with: pip install 'vellum[llm]'")

        api_key = os.getenv("ANTHROPIC_API_KEY")
        if not api_key:
            raise ValueError("ANTHROPIC_API_KEY environment variable not set")

        self.client = anthropic.Anthropic(api_key=api_key)
        self._retryable_exception = anthropic.OverloadedError
        self.update_model(model)

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        response = self.client.messages.create(
            model=self.model,
            max_tokens=MAX_OUTPUT_TOKENS,
            temperature=self.temperature,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
        )
        return LLMResponse(
            content=response.content[0].text,
            model=self.model,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )


class OpenAIProvider(LLMProvider):
    """OpenAI GPT provider with exponential backoff retry."""

    _provider_prefix = "openai"
    _retry_message = "Rate limit hit"

    def __init__(self, model: str = DEFAULT_MODELS["openai"]):
        # Lazy import - the SDK is only needed when enhancement is requested
        try:
            import openai
        except ImportError:
            raise ImportError("openai package required. Install with: pip install 'vellum[llm]'")

        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise ValueError("OPENAI_API_KEY environment variable not set")

        self.client = openai.OpenAI(api_key=api_key)
        self._retryable_exception = openai.RateLimitError
        self.update_model(model)

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        response = self.client.chat.completions.create(
            model=self.model,
            max_tokens=MAX_OUTPUT_TOKENS,
            temperature=self.temperature,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        )
        return LLMResponse(
            content=response.choices[0].message.content or "",
            model=self.model,
            input_tokens=response.usage.prompt_tokens,
            output_tokens=response.usage.completion_tokens,
        )


# --- Provider Factory ---

PROVIDERS = {
    "anthropic": AnthropicProvider,
    "openai": OpenAIProvider,
}


def get_provider(provider_name: Optional[str] = None, model: Optional[str] = None) -> LLMProvider:
    """
    Get an LLM provider instance.

    Args:
        provider_name: "anthropic" or "openai" (default: LLM_PROVIDER env var)
        model: Model name (default: LLM_MODEL env var, else the provider default)

    Returns:
        LLMProvider instance

    Raises:
        ValueError: Unknown provider name, or the provider's API key is missing
    """
    provider_name = (provider_name or os.getenv("LLM_PROVIDER", "openai")).lower()

    if provider_name not in PROVIDERS:
        raise ValueError(f"Unknown provider: {provider_name}. Use 'anthropic' or 'openai'")

    model = model or os.getenv("LLM_MODEL") or DEFAULT_MODELS[provider_name]
    return PROVIDERS[provider_name](model=model)


# --- Response Parsing Utilities ---


def _strip_code_fence(text: str) -> str:
    """Remove a surrounding markdown code block (```json ... ```), if any."""
    text = re.sub(r"^```(?:json)?\s*", "", text.strip())
    return re.sub(r"\s*```$", "", text)


def parse_array_response(text: str, fallback_count: int = 4) -> list[str]:
    """
    Parse JSON array from LLM response with robust fallback parsing.

    Args:
        text: LLM response text
        fallback_count: Number of items to return if JSON parsing fails

    Returns:
        List of strings
    """
    text = _strip_code_fence(text)

    # Try direct JSON parse
    try:
        result = json.loads(text)
        if isinstance(result, list):
            return [str(item) for item in result]
    except json.JSONDecodeError:
        pass

    # Try to find JSON array in the text
    start = text.find("[")
    end = text.rfind("]")
    if start != -1 and end != -1 and end > start:
        try:
            result = json.loads(text[start : end + 1])
            if isinstance(result, list):
                return [str(item) for item in result]
        except json.JSONDecodeError:
            pass

    # Fallback: split by newlines and commas, then clean
    items = []
    for line in re.split(r"[\n,]", text):
        line = line.strip().lstrip("-•*").strip().strip('"')
        if line and not line.startswith("[") and not line.startswith("]"):
            items.append(line)

    return items[:fallback_count] if items else []


def parse_object_response(text: str) -> dict:
    """
    Parse a JSON object from an LLM response, keeping nested values as-is.

    Args:
        text: LLM response text (may be wrapped in a markdown code block)

    Returns:
        Parsed dict, or {} when no JSON object can be recovered
    """
    text = _strip_code_fence(text)

    # Try direct JSON parse
    try:
        result = json.loads(text)
        if isinstance(result, dict):
            return result
    except json.JSONDecodeError:
        pass

    # Try the outermost {...} span
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end != -1 and end > start:
        try:
            result = json.loads(text[start : end + 1])
            if isinstance(result, dict):
                return result
        except json.JSONDecodeError:
            pass

    return {}


def parse_dict_response(
    text: str, fallback_dict: dict[str, list[str]] = None
) -> dict[str, list[str]]:
    """
    Parse JSON dict from LLM response with robust fallback parsing.

    Args:
        text: LLM response text
        fallback_dict: Dict to return if parsing fails (default: empty dict)

    Returns:
        Dict mapping strings to lists of strings
    """
    result = parse_object_response(text)
    if result:
        return {k: [str(i) for i in v] if isinstance(v, list) else [] for k, v in result.items()}

    # Fallback: return provided fallback or empty dict
    return fallback_dict if fallback_dict is not None else {}
