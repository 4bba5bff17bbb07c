"""
Utils Module
通用工具函数
"""
from .logger import setup_logger
from .exceptions import (
    ContentStrategyError,
    ConfigurationError,
    RequestValidationFailed,
    ScraperError,
    LLMError,
    GenerationError,
)

__all__ = [
    "setup_logger",
    "ContentStrategyError",
    "ConfigurationError",
    "RequestValidationFailed",
    "ScraperError",
    "LLMError",
    "GenerationError",
]
