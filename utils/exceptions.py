"""
Custom Exceptions
自定义异常类
"""


class ContentStrategyError(Exception):
    """内容策略引擎基础异常类"""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(ContentStrategyError):
    """配置错误"""

    def __init__(self, message: str, missing: list = None, **kwargs):
        super().__init__(message, kwargs)
        self.missing = list(missing or [])


class RequestValidationFailed(ContentStrategyError):
    """入站请求校验失败"""
    pass


class ScraperError(ContentStrategyError):
    """抓取器错误"""

    def __init__(self, message: str, source: str = None, **kwargs):
        super().__init__(message, kwargs)
        self.source = source


class LLMError(ContentStrategyError):
    """LLM 调用错误"""

    def __init__(self, message: str, provider: str = None, **kwargs):
        super().__init__(message, kwargs)
        self.provider = provider


class GenerationError(LLMError):
    """策略生成失败 (唯一向调用方传播的错误)"""
    pass
