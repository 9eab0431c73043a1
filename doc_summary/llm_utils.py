"""
llm_utils.py - LLM utilities and provider management

This module provides async LLM invocation for DeepSeek, Ollama, and
OpenAI-compatible providers, plus helpers to classify provider errors and
pull text out of provider responses.
"""

import logging
import os
import re
from typing import Any, List, Optional

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from langchain_deepseek import ChatDeepSeek
from langchain_deepseek.chat_models import DEFAULT_API_BASE as DEEPSEEK_DEFAULT_API_BASE
from langchain_ollama import OllamaLLM
from langchain_openai import ChatOpenAI

_LOG = logging.getLogger("llm_utils")

DEFAULT_LLM_PROVIDER = "deepseek"  # "deepseek", "ollama", or "openai"
DEFAULT_OLLAMA_BASE_URL = "http://localhost:11434"
DEFAULT_OLLAMA_MODEL = "qwen3:8b"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
MODEL_NAME = "deepseek-chat"

SERVICE_UNAVAILABLE = 503


class LLMProvider:
    """LLM provider configuration and management.

    Client-side retries are disabled; ``summary_generator`` owns the retry
    policy so every attempt is visible to it.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        provider: str = DEFAULT_LLM_PROVIDER,
        model: str = None,
        temperature: float = 0.3,
        timeout: int = 120,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.provider = provider.lower()
        self.model = model
        self.temperature = temperature
        self.timeout = timeout

        self._configure_provider()

    def _configure_provider(self):
        """Fill in provider-specific defaults from the environment."""
        if self.provider == "ollama":
            if not self.base_url:
                self.base_url = os.getenv("OLLAMA_BASE_URL", DEFAULT_OLLAMA_BASE_URL)
            if not self.model:
                self.model = os.getenv("OLLAMA_MODEL", DEFAULT_OLLAMA_MODEL)
        elif self.provider == "openai":
            if not self.api_key:
                self.api_key = os.getenv("OPENAI_API_KEY")
            if not self.base_url:
                self.base_url = os.getenv("OPENAI_API_BASE", "https://api.openai.com/v1")
            if not self.model:
                self.model = os.getenv("OPENAI_MODEL", DEFAULT_OPENAI_MODEL)
        else:  # deepseek
            if not self.api_key:
                self.api_key = os.getenv("DEEPSEEK_API_KEY")
            if not self.model:
                self.model = MODEL_NAME

    def get_llm(self):
        """Get the configured LLM instance."""
        if self.provider == "ollama":
            _LOG.debug("Using Ollama provider: %s at %s", self.model, self.base_url)
            return OllamaLLM(
                model=self.model,
                base_url=self.base_url,
                temperature=self.temperature,
                client_kwargs={"timeout": self.timeout},
            )
        elif self.provider == "openai":
            if not self.api_key:
                raise ValueError(
                    "OpenAI API key required. Set OPENAI_API_KEY environment variable or pass api_key"
                )
            _LOG.debug("Using OpenAI-compatible provider: %s at %s", self.model, self.base_url)
            return ChatOpenAI(
                model=self.model,
                api_key=self.api_key,
                base_url=self.base_url,
                temperature=self.temperature,
                timeout=self.timeout,
                max_retries=0,
            )
        else:  # deepseek
            if not self.api_key:
                raise ValueError(
                    "DeepSeek API key required. Set DEEPSEEK_API_KEY environment variable or pass api_key"
                )
            _LOG.debug("Using DeepSeek provider: %s", self.model)
            return ChatDeepSeek(
                model=self.model,
                temperature=self.temperature,
                timeout=self.timeout,
                max_retries=0,
                api_key=self.api_key,
                api_base=self.base_url if self.base_url else DEEPSEEK_DEFAULT_API_BASE,
            )

    async def ainvoke(self, messages: List[BaseMessage]) -> Any:
        """Send *messages* once and return the raw provider response."""
        llm = self.get_llm()

        if self.provider == "ollama":
            prompt = "\n\n".join(str(m.content) for m in messages)
            response = await llm.ainvoke(prompt)
            if isinstance(response, str):
                # Ollama reasoning models mix <think> blocks into the output
                response = AIMessage(content=clean_ollama_response(response))
            return response

        return await llm.ainvoke(messages)

    async def agenerate(self, prompt: str) -> Any:
        """Send a single user prompt."""
        return await self.ainvoke([HumanMessage(content=prompt)])


def clean_ollama_response(content: str) -> str:
    """Clean Ollama response by removing <think> tags."""
    return re.sub(r"<think>.*?</think>", "", content, flags=re.DOTALL).strip()


def get_error_status(error: BaseException) -> Optional[int]:
    """HTTP status carried by a provider exception, if any.

    OpenAI-compatible clients expose ``status_code``, ollama's
    ``ResponseError`` does too, and raw httpx errors carry it on ``response``.
    """
    for attr in ("status_code", "status"):
        value = getattr(error, attr, None)
        if isinstance(value, int):
            return value
    response = getattr(error, "response", None)
    value = getattr(response, "status_code", None)
    if isinstance(value, int):
        return value
    return None


def is_service_unavailable(error: BaseException) -> bool:
    return get_error_status(error) == SERVICE_UNAVAILABLE


def extract_response_text(response: Any) -> Optional[str]:
    """Text of a provider response, or None if it exposes none.

    Chat models return an ``AIMessage`` whose ``content`` is either a string
    or a list of content blocks.
    """
    if response is None:
        return None
    if isinstance(response, str):
        content = response
    else:
        content = getattr(response, "content", None)

    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(str(block.get("text", "")))
        content = "".join(parts)

    if not isinstance(content, str) or not content.strip():
        return None
    return content
