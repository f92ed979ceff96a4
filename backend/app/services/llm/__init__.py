from app.services.llm.client import GeminiLLMClient, LLMClientError
from app.services.llm.factory import LLMConfig, get_llm_client, load_llm_config
from app.services.llm.openai_client import OpenAILLMClient

__all__ = [
    "GeminiLLMClient",
    "OpenAILLMClient",
    "LLMClientError",
    "LLMConfig",
    "get_llm_client",
    "load_llm_config",
]
