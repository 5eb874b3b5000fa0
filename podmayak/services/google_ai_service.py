"""
Google AI Studio service for renovation image generation, magic edit, budget analysis and chat
"""
import asyncio
import base64
import json
import logging
from typing import AsyncIterator, Awaitable, Callable, Dict, List, Optional, Tuple

from google import genai
from google.genai import types
from pydantic import ValidationError

from podmayak.core.config import settings
from podmayak.core.errors import BackendError, FatalBackendError, GenerationError, ImageDecodeError
from podmayak.schemas.chat import ChatMessage
from podmayak.schemas.renovation import ImageSize, RenovationAnalysis, RenovationConfig
from podmayak.services import images
from podmayak.services.prompts import (
    CHAT_SYSTEM_INSTRUCTION,
    build_analysis_prompt,
    build_edit_prompt,
    build_renovation_prompt,
    fallback_analysis,
)
from podmayak.services.retry import classify_backend_error, with_retry

logger = logging.getLogger(__name__)


def mask_api_key(api_key: str) -> str:
    if len(api_key) > 12:
        return f"{api_key[:8]}...{api_key[-4:]}"
    return "***"


def _image_data_to_base64(image_data) -> str:
    """
    The SDK may hand back raw image bytes or base64 text as bytes.
    Raw PNG starts with 89504e47, raw JPEG with ffd8ff.
    """
    if isinstance(image_data, str):
        return image_data
    first_hex = image_data[:4].hex()
    if first_hex.startswith("89504e47") or first_hex.startswith("ffd8ff"):
        return base64.b64encode(image_data).decode("utf-8")
    return image_data.decode("utf-8")


def extract_image(response) -> Optional[str]:
    """Return the first inline image of a response as a data URL, or None"""
    parts = None
    if getattr(response, "candidates", None):
        candidate = response.candidates[0]
        if getattr(candidate, "content", None) is not None:
            parts = candidate.content.parts
    if not parts:
        return None

    for part in parts:
        inline_data = getattr(part, "inline_data", None)
        if inline_data is not None and inline_data.data:
            mime_type = inline_data.mime_type or "image/png"
            return f"data:{mime_type};base64,{_image_data_to_base64(inline_data.data)}"
        if getattr(part, "text", None):
            logger.info(f"Gemini text response: {part.text[:200]}...")
    return None


def _image_part(image: images.EncodedImage) -> types.Part:
    return types.Part(inline_data=types.Blob(mime_type=image.mime_type, data=image.to_bytes()))


class RenovationAIService:
    """Service for Google AI Studio integration"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        client_factory: Optional[Callable[[str], genai.Client]] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        self.api_key = settings.google_ai_api_key if api_key is None else api_key
        self.image_model = settings.google_ai_image_model
        self.analysis_model = settings.google_ai_analysis_model
        self.analysis_fallback_model = settings.google_ai_analysis_fallback_model
        self.chat_model = settings.google_ai_chat_model
        self.max_retries = settings.retry_max_retries
        self.initial_delay = settings.retry_initial_delay

        self._client_factory = client_factory or (lambda key: genai.Client(api_key=key))
        self._sleep = sleep
        self._clients: Dict[str, genai.Client] = {}

        if self.api_key:
            logger.info(f"Google AI API Key loaded: {mask_api_key(self.api_key)}")
        else:
            logger.warning("Google AI API key not configured - generation needs an admin-provided key")

    def _get_client(self, api_key: Optional[str] = None) -> genai.Client:
        """Client for the override key when one is set, else for the environment key"""
        key = api_key or self.api_key
        if not key:
            raise FatalBackendError("Google AI API key is not configured")
        if key not in self._clients:
            self._clients[key] = self._client_factory(key)
            logger.info(f"Google GenAI client initialized for key {mask_api_key(key)}")
        return self._clients[key]

    async def _generate_content(self, client: genai.Client, model: str, parts: List[types.Part], config) -> types.GenerateContentResponse:
        """One generate_content call with boundary classification and the retry policy"""

        async def attempt():
            try:
                return await client.aio.models.generate_content(
                    model=model,
                    contents=[types.Content(role="user", parts=parts)],
                    config=config,
                )
            except Exception as e:
                raise classify_backend_error(e, context=model) from e

        return await with_retry(attempt, max_retries=self.max_retries, initial_delay=self.initial_delay, sleep=self._sleep)

    async def _prepare_photo(self, image: str) -> Tuple[images.EncodedImage, str]:
        """Normalize a photo and infer its aspect ratio; undecodable input is sent as is at 4:3"""
        try:
            normalized = await asyncio.to_thread(images.normalize_image, image)
        except ImageDecodeError as e:
            logger.warning(f"Could not normalize input image, sending it unchanged: {e}")
            return images.split_data_url(image), images.DEFAULT_ASPECT_RATIO

        aspect_ratio = await asyncio.to_thread(images.infer_aspect_ratio, normalized.data_url)
        return normalized, aspect_ratio

    async def generate_renovation(self, image: str, config: RenovationConfig, api_key: Optional[str] = None) -> str:
        """Renovate the room in `image` according to `config`; returns the result as a data URL"""
        client = self._get_client(api_key)
        photo, aspect_ratio = await self._prepare_photo(image)
        prompt = build_renovation_prompt(config)

        logger.info(
            f"Generating renovation: style={config.style.value}, room={config.room_description()}, "
            f"aspect_ratio={aspect_ratio}, size={config.size.value}"
        )
        response = await self._generate_content(
            client,
            self.image_model,
            [types.Part(text=prompt), _image_part(photo)],
            types.GenerateContentConfig(
                response_modalities=["IMAGE"],
                image_config=types.ImageConfig(aspect_ratio=aspect_ratio, image_size=config.size.value),
            ),
        )

        result = extract_image(response)
        if not result:
            raise GenerationError("No image generated.")
        return result

    async def edit_renovation(self, image: str, mask: str, instruction: str, api_key: Optional[str] = None) -> str:
        """Regenerate only the white region of `mask` following `instruction`"""
        client = self._get_client(api_key)
        original = images.split_data_url(image)
        aspect_ratio = await asyncio.to_thread(images.infer_aspect_ratio, image)
        binary_mask = await asyncio.to_thread(images.binarize_mask, mask)

        logger.info(f"Magic edit: aspect_ratio={aspect_ratio}, instruction='{instruction[:80]}'")
        response = await self._generate_content(
            client,
            self.image_model,
            [types.Part(text=build_edit_prompt(instruction)), _image_part(original), _image_part(binary_mask)],
            types.GenerateContentConfig(
                response_modalities=["IMAGE"],
                image_config=types.ImageConfig(aspect_ratio=aspect_ratio, image_size=ImageSize.ONE_K.value),
            ),
        )

        result = extract_image(response)
        if not result:
            raise GenerationError("No edited image generated.")
        return result

    async def _try_analyze(self, client: genai.Client, model: str, parts: List[types.Part]) -> RenovationAnalysis:
        response = await self._generate_content(
            client,
            model,
            parts,
            types.GenerateContentConfig(response_mime_type="application/json"),
        )

        text = response.text
        if not text:
            raise FatalBackendError(f"No analysis generated by {model}")
        try:
            return RenovationAnalysis.model_validate(json.loads(text))
        except (json.JSONDecodeError, ValidationError) as e:
            raise FatalBackendError(f"Malformed analysis from {model}: {e}", cause=e) from e

    async def analyze_renovation_plan(
        self,
        original_image: str,
        generated_image: str,
        config: RenovationConfig,
        api_key: Optional[str] = None,
    ) -> RenovationAnalysis:
        """
        Budget, difficulty and materials plan for a before/after pair.

        Tries the primary model, then the fallback model. When both fail the
        generic plan is returned with `is_fallback=True`; this never raises a
        backend error.
        """
        client = self._get_client(api_key)
        parts = [
            types.Part(text=build_analysis_prompt(config)),
            _image_part(images.split_data_url(original_image)),
            _image_part(images.split_data_url(generated_image)),
        ]

        try:
            return await self._try_analyze(client, self.analysis_model, parts)
        except BackendError as e:
            logger.warning(f"Analysis with {self.analysis_model} failed, falling back to {self.analysis_fallback_model}: {e}")

        try:
            return await self._try_analyze(client, self.analysis_fallback_model, parts)
        except BackendError as e:
            logger.error(f"Analysis fallback failed, returning generic plan: {e}")
            return fallback_analysis()

    async def stream_chat_response(
        self, history: List[ChatMessage], message: str, api_key: Optional[str] = None
    ) -> AsyncIterator[str]:
        """Yield the assistant's reply to `message` in text chunks as they arrive"""
        client = self._get_client(api_key)
        chat = client.aio.chats.create(
            model=self.chat_model,
            config=types.GenerateContentConfig(system_instruction=CHAT_SYSTEM_INSTRUCTION),
            history=[types.Content(role=item.role.value, parts=[types.Part(text=item.text)]) for item in history],
        )

        try:
            stream = await chat.send_message_stream(message)
            async for chunk in stream:
                if chunk.text:
                    yield chunk.text
        except Exception as e:
            logger.error(f"Chat error: {e}")
            raise classify_backend_error(e, context=self.chat_model) from e
