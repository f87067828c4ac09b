"""Response generator: tutor persona + learner text -> reply."""

from __future__ import annotations

from typing import Any

from makia.config import Settings
from makia.core.exceptions import GenerationError
from makia.core.profiles import TutorProfile
from makia.core.sentiment import Sentiment
from makia.logging_config import get_logger
from makia.prompts.tutors import build_system_prompt
from makia.services.llm.exceptions import LLMServiceError, LLMThrottledError
from makia.services.llm.protocol import LanguageModel

logger: Any = get_logger(__name__)


class Responder:
    """Builds the system instruction for a turn and asks the model for a reply."""

    def __init__(
        self,
        llm: LanguageModel,
        *,
        max_tokens: int = 500,
        temperature: float = 0.7,
    ) -> None:
        self._llm = llm
        self._max_tokens = max_tokens
        self._temperature = temperature

    @classmethod
    def from_settings(cls, llm: LanguageModel, settings: Settings) -> Responder:
        return cls(
            llm,
            max_tokens=settings.llm_max_tokens,
            temperature=settings.llm_temperature,
        )

    def system_prompt(self, profile: TutorProfile, sentiment: Sentiment) -> str:
        return build_system_prompt(
            profile.prompt_template,
            confused=sentiment is Sentiment.CONFUSED,
        )

    async def generate(self, profile: TutorProfile, user_text: str, sentiment: Sentiment) -> str:
        """Generate the tutor's reply.

        Raises:
            GenerationError: When the model fails or returns nothing
        """
        try:
            return await self._llm.complete(
                self.system_prompt(profile, sentiment),
                user_text,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
            )
        except LLMThrottledError as e:
            logger.warning(f"LLM throttled for profile {profile.id}, retry after {e.retry_after:.0f}s")
            raise GenerationError(
                f"Reply generation throttled, retry after {e.retry_after:.0f}s"
            ) from e
        except LLMServiceError as e:
            raise GenerationError(f"Reply generation failed: {e}") from e
