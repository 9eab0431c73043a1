"""
summary_generator.py - Markdown summary generation with bounded retry

The generation service is called at most ``max_retries`` times per request.
Only a service-unavailable (HTTP 503) failure is retried, after a fixed
delay; any other failure ends the request immediately.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, List, Optional

from langchain_core.prompts import PromptTemplate

from .errors import DocumentSummaryError, TransientUpstreamError, UpstreamError
from .llm_utils import (
    LLMProvider,
    extract_response_text,
    get_error_status,
    is_service_unavailable,
)
from .models import GenerationOutcome, SummaryRequest

_LOG = logging.getLogger("summary_generator")

DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY = 5.0

INVALID_RESPONSE_MESSAGE = "Failed to get a valid response from the AI model."

SUMMARY_PROMPT = PromptTemplate.from_template(
    "Please summarize the following document in {language} with explanations "
    "of important topics I need to know.\n"
    "Use markdown for headings, bullet points, and important notes. Keep it concise.\n"
    "---\n"
    "{content}\n"
    "---"
)

GenerateFunc = Callable[[str], Awaitable[Any]]
SleepFunc = Callable[[float], Awaitable[Any]]


@dataclass
class RetryState:
    """Progress through a fixed budget of generation attempts."""

    max_attempts: int
    attempt: int = 0  # 1-based index of the attempt in flight, 0 before the first
    last_error: Optional[DocumentSummaryError] = None
    errors: List[DocumentSummaryError] = field(default_factory=list)

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

    @property
    def remaining(self) -> int:
        return self.max_attempts - self.attempt

    @property
    def is_last_attempt(self) -> bool:
        return self.attempt >= self.max_attempts

    def begin_attempt(self) -> int:
        if self.is_last_attempt:
            raise RuntimeError("retry budget exhausted")
        self.attempt += 1
        return self.attempt

    def record_failure(self, error: DocumentSummaryError) -> None:
        self.last_error = error
        self.errors.append(error)

    def should_retry(self, error: DocumentSummaryError) -> bool:
        """Only transient failures are retried, and never after the last attempt."""
        return isinstance(error, TransientUpstreamError) and not self.is_last_attempt


def classify_error(error: BaseException) -> DocumentSummaryError:
    """Map a generation-service exception onto the error taxonomy."""
    if isinstance(error, (TransientUpstreamError, UpstreamError)):
        return error
    if is_service_unavailable(error):
        return TransientUpstreamError(str(error))
    return UpstreamError(str(error) or error.__class__.__name__, status=get_error_status(error))


def build_prompt(request: SummaryRequest, max_input_char: Optional[int] = None) -> str:
    """Fill the summary template with the request text and language."""
    content = request.text
    if max_input_char and len(content) > max_input_char:
        _LOG.warning(
            "Document text truncated from %d to %d characters", len(content), max_input_char
        )
        content = content[:max_input_char]
    return SUMMARY_PROMPT.format(language=request.target_language, content=content)


class SummaryGenerator:
    """Turns extracted text into a markdown summary via the generation service."""

    def __init__(
        self,
        generate: Optional[GenerateFunc] = None,
        llm_provider: Optional[LLMProvider] = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        max_input_char: Optional[int] = None,
        sleep: SleepFunc = asyncio.sleep,
    ):
        if generate is None:
            generate = (llm_provider or LLMProvider()).agenerate
        self._generate = generate
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.max_input_char = max_input_char
        self._sleep = sleep

    def build_prompt(self, request: SummaryRequest) -> str:
        return build_prompt(request, self.max_input_char)

    async def summarize(self, text: str, target_language: Optional[str] = None) -> GenerationOutcome:
        """Generate a markdown summary of *text* in *target_language*.

        Returns:
            A successful outcome with the markdown, or a failed one whose
            ``cause`` describes the terminal error
        """
        request = SummaryRequest(text=text, target_language=target_language)
        prompt = self.build_prompt(request)
        state = RetryState(max_attempts=self.max_retries)

        while True:
            attempt = state.begin_attempt()
            try:
                response = await self._generate(prompt)
            except Exception as e:
                error = classify_error(e)
                state.record_failure(error)
                if state.should_retry(error):
                    _LOG.warning(
                        "Attempt %d failed with 503 error. Retrying in %s seconds...",
                        attempt,
                        self.retry_delay,
                    )
                    await self._sleep(self.retry_delay)
                    continue
                return self._failed(state)

            markdown = extract_response_text(response)
            if markdown is None:
                _LOG.error("Generation service returned no text on attempt %d", attempt)
                state.record_failure(UpstreamError(INVALID_RESPONSE_MESSAGE))
                return self._failed(state)

            _LOG.info("Summary generated on attempt %d (%d characters)", attempt, len(markdown))
            return GenerationOutcome.success(markdown, attempts=attempt)

    def _failed(self, state: RetryState) -> GenerationOutcome:
        error = state.last_error
        if isinstance(error, TransientUpstreamError):
            error = UpstreamError(
                f"Generation service unavailable after {state.attempt} attempts: {error}",
                status=error.status,
            )
        _LOG.error("Summary generation failed after %d attempt(s): %s", state.attempt, error)
        return GenerationOutcome.failure(str(error), attempts=state.attempt)
