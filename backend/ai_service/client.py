"""
Text-generation clients for the chatbot route.

Both generators expose generate(prompt) -> (text, error). Exactly one of
the two is None, so the route can map failures to a status code without
catching SDK-specific exceptions.
"""

import logging
from typing import Any, Dict, Optional, Tuple

# --- GEMINI IMPORTS ---
import google.genai as genai

# --- OPENAI IMPORTS ---
from openai import OpenAI

DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"


class GeminiTextGenerator:
    """Sends a prompt to Gemini and returns the plain text reply."""

    name = "gemini"

    def __init__(self, api_key: str, model: str = DEFAULT_GEMINI_MODEL) -> None:
        self.client = genai.Client(api_key=api_key)
        self.model = model

    def generate(self, prompt: str) -> Tuple[Optional[str], Optional[str]]:
        try:
            response = self.client.models.generate_content(model=self.model, contents=prompt)
        except Exception as e:
            logging.error(f"[AI] Gemini request failed: {e}")
            return None, str(e)

        text = response.text
        if text is None:
            return None, "Gemini returned an empty response"
        return text, None


class OpenAITextGenerator:
    """Sends a prompt to an OpenAI chat model and returns the reply text."""

    name = "openai"

    def __init__(self, api_key: str, model: str = DEFAULT_OPENAI_MODEL) -> None:
        self.client = OpenAI(api_key=api_key)
        self.model = model

    def generate(self, prompt: str) -> Tuple[Optional[str], Optional[str]]:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
            )
        except Exception as e:
            logging.error(f"[AI] OpenAI request failed: {e}")
            return None, str(e)

        text = response.choices[0].message.content
        if text is None:
            return None, "OpenAI returned an empty response"
        return text, None


def build_text_generator(config: Dict[str, Any]):
    """
    Pick and initialize a text generator from app config.

    AI_PROVIDER selects one explicitly. Without it, Gemini is tried first,
    then OpenAI, depending on which API key is present.

    Returns:
        GeminiTextGenerator | OpenAITextGenerator | None: None when no
        provider could be configured.
    """
    provider = (config.get("AI_PROVIDER") or "").lower()
    gemini_key = config.get("GEMINI_API_KEY")
    openai_key = config.get("OPENAI_API_KEY")

    if provider not in ("", "gemini", "openai"):
        logging.warning(f"[AI] Unknown AI_PROVIDER '{provider}', falling back to auto-detect.")
        provider = ""

    if provider in ("", "gemini") and gemini_key:
        try:
            generator = GeminiTextGenerator(gemini_key, config.get("GEMINI_MODEL") or DEFAULT_GEMINI_MODEL)
            logging.info("[AI] Successfully initialized Gemini client.")
            return generator
        except Exception as e:
            logging.warning(f"[AI] Gemini client initialization failed: {e}.")
            if provider == "gemini":
                return None

    if provider in ("", "openai") and openai_key:
        try:
            generator = OpenAITextGenerator(openai_key, config.get("OPENAI_MODEL") or DEFAULT_OPENAI_MODEL)
            logging.info("[AI] Successfully initialized OpenAI client.")
            return generator
        except Exception as e:
            logging.warning(f"[AI] OpenAI client initialization failed: {e}.")

    logging.warning("[AI] No AI provider configured; /chatbot will return 500.")
    return None
