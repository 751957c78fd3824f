"""
Natural-language alignment advice.

Builds a prompt from the current shims and result and asks a chat model
for a short recommendation. The backend is any callable taking
(system_prompt, query) and returning text; OpenAIAdvisor is the default.

get_alignment_advice() never raises: configuration problems and backend
failures come back as user-facing messages.
"""

import logging
import os
from typing import Callable, Optional

from openai import OpenAI

from .constants import (
    ADVICE_API_KEY_ENV,
    ADVICE_MAX_TOKENS,
    ADVICE_MODEL_DEFAULT,
    ADVICE_MODEL_ENV,
    ADVICE_TEMPERATURE,
    OFFSET_TOLERANCE_MM,
)
from .calculator.validation import needs_attention
from .io import Correction, SimulationResult

logger = logging.getLogger(__name__)

DEFAULT_QUERY = "Analyze the current situation and give advice."

MISSING_KEY_MESSAGE = (
    f"Advice is unavailable: API key not found. Set {ADVICE_API_KEY_ENV} to enable it."
)
EMPTY_RESPONSE_MESSAGE = "Failed to get a response from the advice service."
SERVICE_ERROR_MESSAGE = "The advice service returned an error. Please try again later."

Advisor = Callable[[str, str], str]


class AdviceError(RuntimeError):
    """Raised by an advisor backend that cannot produce advice."""


def build_system_prompt(correction: Correction, result: SimulationResult) -> str:
    """Persona and current machine state for the chat model."""
    status = "OUT OF TOLERANCE" if needs_attention(result) else "within tolerance"
    return (
        "You are an expert mechanical engineer specialising in laser and dial-indicator "
        "shaft alignment of rotating machinery.\n"
        "Give brief, precise and safe advice. Use the proper terms (parallel offset, "
        "angular misalignment, soft foot, shim pack).\n\n"
        "Current state of the movable machine (vertical plane):\n"
        f"- Rear foot shim change: {correction.rear_shim_mm:.2f} mm\n"
        f"- Front foot shim change: {correction.front_shim_mm:.2f} mm\n"
        f"- Parallel offset at the coupling: {result.vertical_offset_mm:.3f} mm "
        "(positive = motor high)\n"
        f"- Angular misalignment: {result.angular_misalignment_mm_per_100:.3f} mm/100mm\n"
        f"- Status: {status}\n\n"
        f"If the misalignment is large (>{OFFSET_TOLERANCE_MM} mm), explain how to fix it. "
        "Keep the answer under 150 words."
    )


class OpenAIAdvisor:
    """Chat-completions backend."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: float = ADVICE_TEMPERATURE,
        max_tokens: int = ADVICE_MAX_TOKENS,
    ):
        self.api_key = api_key or os.getenv(ADVICE_API_KEY_ENV)
        self.model = model or os.getenv(ADVICE_MODEL_ENV) or ADVICE_MODEL_DEFAULT
        self.temperature = temperature
        self.max_tokens = max_tokens

        if not self.api_key:
            raise AdviceError(MISSING_KEY_MESSAGE)

        self.client = OpenAI(api_key=self.api_key)

    def __call__(self, system_prompt: str, query: str) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": query},
            ],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""


def get_alignment_advice(
    correction: Correction,
    result: SimulationResult,
    query: str = "",
    advisor: Optional[Advisor] = None,
) -> str:
    """
    Ask the advisor about the current alignment state.

    Args:
        correction: Shims currently applied
        result: Forward-model result for those shims
        query: User question; blank uses DEFAULT_QUERY
        advisor: Backend callable; defaults to OpenAIAdvisor()

    Returns:
        The advice text, or a user-facing message when no advice is available
    """
    query = query.strip() or DEFAULT_QUERY

    if advisor is None:
        try:
            advisor = OpenAIAdvisor()
        except AdviceError as e:
            logger.warning(str(e))
            return str(e)

    system_prompt = build_system_prompt(correction, result)
    logger.debug(f"Advice query: {query!r}")

    try:
        text = advisor(system_prompt, query)
    except AdviceError as e:
        logger.warning(f"Advisor declined: {e}")
        return str(e)
    except Exception:
        logger.exception("Advice backend failed")
        return SERVICE_ERROR_MESSAGE

    if not text or not text.strip():
        logger.warning("Advice backend returned an empty response")
        return EMPTY_RESPONSE_MESSAGE

    return text.strip()
