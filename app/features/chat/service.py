"""Medical-information chatbot backed by an OpenAI-compatible chat API."""

from typing import List, Optional

from openai import AsyncOpenAI, OpenAIError

from app.config import Settings
from app.core.logging import logger
from app.shared.exceptions import UpstreamException


MEDICAL_SYSTEM_PROMPT = """You are a helpful medical assistant that provides general health information. Your role is to provide factual, evidence-based health information while being clear about limitations.

Important rules you must follow:
1. NEVER diagnose conditions or prescribe medications
2. ALWAYS recommend consulting a qualified healthcare professional for specific issues
3. Only provide general, factual medical information based on established medical consensus
4. For emergencies, ALWAYS advise contacting emergency services immediately
5. Be clear about your limitations as an AI assistant and when a doctor should be consulted
6. Do not provide specific treatment plans or dosages
7. Focus on general health education and wellness information
8. Be compassionate and understanding while remaining factual
9. When asked about symptoms, explain possible causes in general terms but emphasize the importance of professional evaluation
10. If asked about medications, only provide general information about drug classes and common uses, not specific recommendations

Remember: Your purpose is to supplement, not replace, professional medical advice."""


class ChatService:
    """Service for answering general health questions."""

    def __init__(self, settings: Settings, client: Optional[AsyncOpenAI] = None):
        self.settings = settings
        self.client = client
        if self.client is None and settings.CHAT_API_KEY:
            self.client = AsyncOpenAI(
                api_key=settings.CHAT_API_KEY,
                base_url=settings.CHAT_BASE_URL,
                timeout=settings.OUTBOUND_TIMEOUT_SECONDS,
                max_retries=0,
            )

    @staticmethod
    def build_messages(message: str, response_format: Optional[str] = None) -> List[dict]:
        """Build the chat messages: safety prompt, optional format instruction, user query."""
        system_prompt = MEDICAL_SYSTEM_PROMPT
        if response_format:
            system_prompt = f"{system_prompt}\n\nResponse format: {response_format}"

        return [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": message},
        ]

    async def reply(self, message: str, response_format: Optional[str] = None) -> str:
        """
        Ask the language model a general health question.

        Raises:
            UpstreamException: If the provider is not configured, fails, or returns nothing
        """
        if self.client is None:
            raise UpstreamException("Chat provider is not configured")

        try:
            completion = await self.client.chat.completions.create(
                model=self.settings.CHAT_MODEL,
                messages=self.build_messages(message, response_format),
                max_tokens=self.settings.CHAT_MAX_TOKENS,
                temperature=self.settings.CHAT_TEMPERATURE,
                top_p=self.settings.CHAT_TOP_P,
            )
        except OpenAIError as e:
            logger.error(f"Chat provider error: {type(e).__name__}: {e}")
            raise UpstreamException("Chat provider request failed")

        if not completion.choices or not completion.choices[0].message.content:
            logger.error("Chat provider returned no content")
            raise UpstreamException("No response from chat provider")

        return completion.choices[0].message.content
