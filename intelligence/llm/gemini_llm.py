"""
Google Gemini LLM
支持 Gemini 2.0 / 1.5 系列模型，可要求返回 JSON
"""
from typing import List, Optional, Dict, Any
import logging

from .base import BaseLLM, Message, MessageRole, LLMResponse


logger = logging.getLogger(__name__)


class GeminiLLM(BaseLLM):
    """
    Google Gemini LLM 实现

    支持模型:
    - gemini-2.0-flash (默认)
    - gemini-1.5-pro
    - gemini-1.5-flash
    """

    def __init__(
        self,
        model: str = "gemini-2.0-flash",
        api_key: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: int = 8192,
        timeout: float = 90.0,
        **kwargs,
    ):
        super().__init__(model, temperature, max_tokens, timeout, **kwargs)
        self.api_key = api_key

    @property
    def provider(self) -> str:
        return "gemini"

    def _convert_messages(self, messages: List[Message]) -> tuple:
        """
        转换消息格式 (Gemini 格式)

        Returns:
            (system_instruction, prompt) 多条 user 消息按顺序拼接
        """
        system_instruction = None
        parts = []

        for msg in messages:
            if msg.role == MessageRole.SYSTEM:
                system_instruction = msg.content
            else:
                parts.append(msg.content)

        return system_instruction, "\n\n".join(parts)

    def _generation_config(self, **kwargs) -> Dict[str, Any]:
        config: Dict[str, Any] = {
            "temperature": kwargs.get("temperature", self.temperature),
            "max_output_tokens": kwargs.get("max_tokens", self.max_tokens),
        }
        mime_type = kwargs.get("response_mime_type")
        if mime_type:
            config["response_mime_type"] = mime_type
        return config

    async def acomplete(
        self,
        messages: List[Message],
        **kwargs,
    ) -> LLMResponse:
        """异步生成响应"""
        import google.generativeai as genai

        genai.configure(api_key=self.api_key)

        system_instruction, prompt = self._convert_messages(messages)

        model = genai.GenerativeModel(
            model_name=self.model,
            generation_config=self._generation_config(**kwargs),
            system_instruction=system_instruction,
        )

        response = await model.generate_content_async(
            prompt,
            request_options={"timeout": self.timeout},
        )

        # response.text 在没有有效候选时抛出 ValueError
        content = response.text

        usage = {}
        if getattr(response, "usage_metadata", None):
            usage = {
                "prompt_tokens": response.usage_metadata.prompt_token_count,
                "completion_tokens": response.usage_metadata.candidates_token_count,
                "total_tokens": response.usage_metadata.total_token_count,
            }

        return LLMResponse(
            content=content,
            model=self.model,
            usage=usage,
            finish_reason=response.candidates[0].finish_reason.name if response.candidates else None,
            raw_response=response,
        )
