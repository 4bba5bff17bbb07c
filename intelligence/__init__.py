"""
Intelligence Module
智能层 - 提示词组装 + LLM 策略生成
"""
from .llm import BaseLLM, GeminiLLM
from .strategy_prompt import (
    CALENDAR_DAYS,
    NO_DATA_PLACEHOLDER,
    STRATEGY_SECTIONS,
    assemble_prompt,
    render_groups,
    render_titles,
)
from .strategy_generator import StrategyGenerator, build_strategy_generator

__all__ = [
    # LLM
    "BaseLLM",
    "GeminiLLM",
    # Prompt
    "CALENDAR_DAYS",
    "NO_DATA_PLACEHOLDER",
    "STRATEGY_SECTIONS",
    "assemble_prompt",
    "render_groups",
    "render_titles",
    # Generation
    "StrategyGenerator",
    "build_strategy_generator",
]
