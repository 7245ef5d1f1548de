"""Remote completion integration for dependency-aware chat."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum


class AIModel(Enum):
    DEEPSEEK_CHAT = "deepseek/deepseek-chat"
    DEEPSEEK_CODER = "deepseek/deepseek-coder"


@dataclass
class AIConfig:
    api_key: str = ""
    model: AIModel = AIModel.DEEPSEEK_CHAT
    temperature: float = 0.7
    max_tokens: int = 1000
    base_url: str = "https://openrouter.ai/api/v1"

    def __post_init__(self):
        if not self.api_key:
            self.api_key = os.getenv("DEEPSEEK_API_KEY", "")


from .service import DeepSeekService
from .context import ContextBuilder, FileContext
