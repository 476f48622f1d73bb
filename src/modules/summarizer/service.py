import logging

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_huggingface import ChatHuggingFace, HuggingFaceEndpoint

from src.config.settings import Settings, is_configured, settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "Summarize the following news in 2-3 neutral lines. "
    "No opinions, no assumptions."
)
MAX_TOKENS = 160
TEMPERATURE = 0.3


class SummarizerService:
    """Best-effort news summaries from a hosted chat model."""

    def __init__(self, config: Settings | None = None) -> None:
        config = config or settings
        self._token = config.hf_api_token
        self._model = config.summary_model
        self._chat_model: ChatHuggingFace | None = None

    @property
    def enabled(self) -> bool:
        return is_configured(self._token)

    def _build_chat_model(self) -> ChatHuggingFace:
        llm = HuggingFaceEndpoint(
            repo_id=self._model,
            huggingfacehub_api_token=self._token,
            provider="auto",
            task="text-generation",
            temperature=TEMPERATURE,
            max_new_tokens=MAX_TOKENS,
        )
        return ChatHuggingFace(llm=llm)

    async def summarize(self, text: str) -> str | None:
        """Return a short summary, or None when disabled or the call fails."""
        if not self.enabled or not text.strip():
            return None
        try:
            if self._chat_model is None:
                self._chat_model = self._build_chat_model()
            response = await self._chat_model.ainvoke(
                [SystemMessage(content=SYSTEM_PROMPT), HumanMessage(content=text)]
            )
        except Exception:
            logger.warning("Summarization failed for model %s", self._model, exc_info=True)
            return None

        content = response.content if isinstance(response.content, str) else ""
        return content.strip() or None


summarizer_service = SummarizerService()
