import os
import logging
from json.decoder import JSONDecodeError
from openai import OpenAI
from typing import Dict, Any, Optional

from domain.constants import DEFAULT_MESSAGE, OFFLINE_MESSAGE

logger = logging.getLogger(__name__)


def _sanitize_env_value(value: Optional[str]) -> Optional[str]:
    """
    Clean up env-provided strings that may include surrounding quotes or whitespace.

    Some shells/export flows set values like OPENROUTER_API_KEY="sk-or-...".
    The OpenAI SDK forwards the raw string, so we strip wrapping quotes here
    to avoid 401s that look like "No cookie auth credentials found".
    """
    if value is None:
        return None
    cleaned = value.strip()
    if len(cleaned) >= 2 and (
        (cleaned[0] == '"' and cleaned[-1] == '"') or (cleaned[0] == "'" and cleaned[-1] == "'")
    ):
        cleaned = cleaned[1:-1].strip()
    return cleaned


def build_prompt(score: int) -> str:
    return (
        f"I just played Snake and scored {score} points. "
        "Give me a very short, witty, sarcastic, or encouraging single-sentence comment "
        "about my performance. If the score is low, roast me gently."
    )


class CommentaryProviderInterface:
    """
    A common interface for commentary calls.
    Model name is stored during initialization.
    """
    def get_response(self, prompt: str) -> Dict[str, Any]: # Returns dict with text and usage
        raise NotImplementedError("Subclasses should implement this method.")


class OpenRouterProvider(CommentaryProviderInterface):
    def __init__(self, api_key: str, model_name: str, max_tokens: int = 60, timeout: float = 15.0):
        raw_base_url = os.getenv("OPENROUTER_BASE_URL")
        base_url = _sanitize_env_value(raw_base_url) or "https://openrouter.ai/api/v1"
        self.client = OpenAI(api_key=_sanitize_env_value(api_key) or api_key, base_url=base_url, timeout=timeout)
        self.model_name = model_name
        self.max_tokens = max_tokens

        headers = {}
        referer = os.getenv("OPENROUTER_SITE_URL")
        title = os.getenv("OPENROUTER_SITE_NAME", "Retro Snake")
        if referer:
            headers["HTTP-Referer"] = referer
        if title:
            headers["X-Title"] = title
        self.extra_headers = headers or None

    def get_response(self, prompt: str) -> Dict[str, Any]:
        request_kwargs: Dict[str, Any] = {"max_tokens": self.max_tokens}
        if self.extra_headers:
            request_kwargs['extra_headers'] = self.extra_headers

        try:
            response = self.client.chat.completions.create(
                model=self.model_name,
                messages=[{"role": "user", "content": prompt}],
                **request_kwargs,
            )
        except JSONDecodeError as exc:
            raise ValueError(
                "OpenRouter chat completion returned a non-JSON payload. "
                "This usually means the model slug is invalid or the request was redirected to an HTML error page."
            ) from exc

        if not getattr(response, "choices", None):
            raise ValueError(f"OpenRouter response missing choices: {response}")

        # Extract usage information
        usage = response.usage if hasattr(response, 'usage') else None
        content = response.choices[0].message.content

        return {
            "text": (content or "").strip(),
            "input_tokens": usage.prompt_tokens if usage else 0,
            "output_tokens": usage.completion_tokens if usage else 0
        }


def create_commentary_provider(model_name: str) -> Optional[CommentaryProviderInterface]:
    """
    Factory function for the commentary provider.

    Returns None when no OpenRouter key is configured; callers then fall
    back to the offline message.
    """
    openrouter_api_key = _sanitize_env_value(os.getenv("OPENROUTER_API_KEY"))
    if not openrouter_api_key:
        logger.info("OPENROUTER_API_KEY is not set, game over commentary is disabled")
        return None

    return OpenRouterProvider(api_key=openrouter_api_key, model_name=model_name)


def generate_game_over_message(score: int, provider: Optional[CommentaryProviderInterface]) -> str:
    """
    Ask the provider for a one-line comment on the final score.

    Never raises: an empty reply gives DEFAULT_MESSAGE and any failure
    (missing provider, network, quota, malformed payload) gives OFFLINE_MESSAGE.
    """
    if provider is None:
        return OFFLINE_MESSAGE

    try:
        response_data = provider.get_response(build_prompt(score))
        text = response_data.get("text") if isinstance(response_data, dict) else None
        if not isinstance(text, str):
            text = ""
    except Exception as exc:  # noqa: BLE001 - the game over screen must still render
        logger.error(f"Commentary provider error for score {score}: {exc}")
        return OFFLINE_MESSAGE

    return text.strip() or DEFAULT_MESSAGE
