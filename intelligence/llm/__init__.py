"""
LLM Module
LLM 抽象层
"""
from .base import BaseLLM, LLMResponse, Message, MessageRole
from .gemini_llm import GeminiLLM

__all__ = [
    "BaseLLM",
    "LLMResponse",
    "Message",
    "MessageRole",
    "GeminiLLM",
]
