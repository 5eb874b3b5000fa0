"""
Unit tests for Google AI Service module
Tests renovation generation, magic edit, analysis fallback and chat streaming
"""
import base64
import json
from unittest.mock import AsyncMock, Mock

import pytest

from podmayak.core.config import settings
from podmayak.core.errors import FatalBackendError, GenerationError, TransientBackendError
from podmayak.schemas.chat import ChatMessage, ChatRole
from podmayak.schemas.renovation import RenovationConfig
from podmayak.services.google_ai_service import RenovationAIService, extract_image, mask_api_key

PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
)

ANALYSIS_JSON = json.dumps(
    {
        "estimatedBudgetRange": "4,000 - 6,000 AZN",
        "difficultyLevel": "Asan",
        "materials": ["Laminat"],
        "furnitureToBuy": ["Divan"],
        "designTips": ["Açıq rənglər"],
        "steps": ["Döşəmə"],
    }
)


class FakeAPIError(Exception):
    def __init__(self, message, code=None):
        super().__init__(message)
        self.code = code


def image_response(data=PNG_BYTES, mime_type="image/png"):
    part = Mock(inline_data=Mock(data=data, mime_type=mime_type), text=None)
    return Mock(candidates=[Mock(content=Mock(parts=[part]))])


def text_response(text):
    part = Mock(inline_data=None, text=text)
    return Mock(candidates=[Mock(content=Mock(parts=[part]))], text=text)


@pytest.fixture
def service(mock_google_ai_client):
    return RenovationAIService(
        api_key="AIzaSyTestKey1234567890",
        client_factory=lambda key: mock_google_ai_client,
        sleep=AsyncMock(),
    )


class TestHelpers:

    @pytest.mark.unit
    def test_mask_api_key(self):
        assert mask_api_key("AIzaSyTestKey1234567890") == "AIzaSyTe...7890"
        assert mask_api_key("short") == "***"

    @pytest.mark.unit
    def test_extract_raw_png_bytes(self):
        data_url = extract_image(image_response())
        assert data_url == "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode()

    @pytest.mark.unit
    def test_extract_base64_text_bytes(self):
        encoded = base64.b64encode(PNG_BYTES)
        assert extract_image(image_response(data=encoded)).endswith(encoded.decode())

    @pytest.mark.unit
    def test_extract_text_only_response(self):
        assert extract_image(text_response("I cannot do that")) is None

    @pytest.mark.unit
    def test_extract_without_candidates(self):
        assert extract_image(Mock(candidates=[])) is None


class TestClientSelection:

    @pytest.mark.unit
    def test_missing_key_is_fatal(self):
        service = RenovationAIService(api_key="", client_factory=Mock())
        with pytest.raises(FatalBackendError):
            service._get_client()

    @pytest.mark.unit
    def test_override_key_takes_precedence(self):
        factory = Mock(side_effect=lambda key: Mock(name=key))
        service = RenovationAIService(api_key="env-key", client_factory=factory)

        service._get_client("admin-key")
        service._get_client("admin-key")
        service._get_client()

        assert [call.args[0] for call in factory.call_args_list] == ["admin-key", "env-key"]


class TestGenerateRenovation:

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_returns_data_url(self, service, mock_google_ai_client, room_photo):
        mock_google_ai_client.aio.models.generate_content.return_value = image_response()

        result = await service.generate_renovation(room_photo, RenovationConfig(size="2K"))

        assert result.startswith("data:image/png;base64,")
        kwargs = mock_google_ai_client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == settings.google_ai_image_model
        assert kwargs["config"].response_modalities == ["IMAGE"]
        assert kwargs["config"].image_config.aspect_ratio == "4:3"
        assert kwargs["config"].image_config.image_size == "2K"
        parts = kwargs["contents"][0].parts
        assert "Podmayak AI" in parts[0].text
        assert parts[1].inline_data.mime_type == "image/jpeg"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_aspect_ratio_follows_photo(self, service, mock_google_ai_client, image_factory):
        mock_google_ai_client.aio.models.generate_content.return_value = image_response()

        await service.generate_renovation(image_factory(1080, 1920), RenovationConfig())

        kwargs = mock_google_ai_client.aio.models.generate_content.call_args.kwargs
        assert kwargs["config"].image_config.aspect_ratio == "9:16"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_no_image_raises(self, service, mock_google_ai_client, room_photo):
        mock_google_ai_client.aio.models.generate_content.return_value = text_response("Sorry")

        with pytest.raises(GenerationError, match="No image generated."):
            await service.generate_renovation(room_photo, RenovationConfig())

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_retries_overloaded_backend(self, service, mock_google_ai_client, room_photo):
        mock_google_ai_client.aio.models.generate_content.side_effect = [
            FakeAPIError("The model is overloaded", code=503),
            image_response(),
        ]

        result = await service.generate_renovation(room_photo, RenovationConfig())

        assert result.startswith("data:image/png")
        assert mock_google_ai_client.aio.models.generate_content.await_count == 2
        service._sleep.assert_awaited_once_with(3.0)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_fatal_error_not_retried(self, service, mock_google_ai_client, room_photo):
        mock_google_ai_client.aio.models.generate_content.side_effect = FakeAPIError("API key not valid", code=400)

        with pytest.raises(FatalBackendError):
            await service.generate_renovation(room_photo, RenovationConfig())

        assert mock_google_ai_client.aio.models.generate_content.await_count == 1

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_persistent_outage(self, service, mock_google_ai_client, room_photo):
        mock_google_ai_client.aio.models.generate_content.side_effect = FakeAPIError("unavailable", code=503)

        with pytest.raises(TransientBackendError):
            await service.generate_renovation(room_photo, RenovationConfig())

        assert mock_google_ai_client.aio.models.generate_content.await_count == settings.retry_max_retries + 1


class TestMagicEdit:

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_sends_image_and_binary_mask(self, service, mock_google_ai_client, generated_image, image_factory):
        mock_google_ai_client.aio.models.generate_content.return_value = image_response()

        result = await service.edit_renovation(generated_image, image_factory(800, 600, color="white"), "Add a plant")

        assert result.startswith("data:image/png")
        kwargs = mock_google_ai_client.aio.models.generate_content.call_args.kwargs
        parts = kwargs["contents"][0].parts
        assert len(parts) == 3
        assert "USER INSTRUCTION: Add a plant" in parts[0].text
        assert parts[2].inline_data.mime_type == "image/png"
        assert kwargs["config"].image_config.image_size == "1K"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_no_image_raises(self, service, mock_google_ai_client, generated_image, image_factory):
        mock_google_ai_client.aio.models.generate_content.return_value = text_response("no")

        with pytest.raises(GenerationError):
            await service.edit_renovation(generated_image, image_factory(800, 600), "Add a plant")


class TestAnalyzeRenovationPlan:

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_primary_model(self, service, mock_google_ai_client, room_photo, generated_image):
        mock_google_ai_client.aio.models.generate_content.return_value = text_response(ANALYSIS_JSON)

        analysis = await service.analyze_renovation_plan(room_photo, generated_image, RenovationConfig())

        assert analysis.estimated_budget_range == "4,000 - 6,000 AZN"
        assert analysis.is_fallback is False
        kwargs = mock_google_ai_client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == settings.google_ai_analysis_model
        assert kwargs["config"].response_mime_type == "application/json"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_falls_back_to_second_model(self, service, mock_google_ai_client, room_photo, generated_image):
        mock_google_ai_client.aio.models.generate_content.side_effect = [
            FakeAPIError("model not found", code=404),
            text_response(ANALYSIS_JSON),
        ]

        analysis = await service.analyze_renovation_plan(room_photo, generated_image, RenovationConfig())

        assert analysis.is_fallback is False
        models = [call.kwargs["model"] for call in mock_google_ai_client.aio.models.generate_content.call_args_list]
        assert models == [settings.google_ai_analysis_model, settings.google_ai_analysis_fallback_model]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_generic_plan_when_both_fail(self, service, mock_google_ai_client, room_photo, generated_image):
        mock_google_ai_client.aio.models.generate_content.return_value = text_response("not json at all")

        analysis = await service.analyze_renovation_plan(room_photo, generated_image, RenovationConfig())

        assert analysis.is_fallback is True
        assert analysis.estimated_budget_range == "Hesablamaq mümkün olmadı"
        assert mock_google_ai_client.aio.models.generate_content.await_count == 2


class TestChatStream:

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_yields_chunks(self, service, mock_google_ai_client):
        async def chunks():
            for text in ["Salam", "", " dünya"]:
                yield Mock(text=text)

        chat = Mock()
        chat.send_message_stream = AsyncMock(return_value=chunks())
        mock_google_ai_client.aio.chats.create.return_value = chat

        history = [ChatMessage(role=ChatRole.USER, text="Salam"), ChatMessage(role=ChatRole.MODEL, text="Buyurun")]
        received = [text async for text in service.stream_chat_response(history, "Laminat yoxsa parket?")]

        assert received == ["Salam", " dünya"]
        chat.send_message_stream.assert_awaited_once_with("Laminat yoxsa parket?")
        create_kwargs = mock_google_ai_client.aio.chats.create.call_args.kwargs
        assert [item.role for item in create_kwargs["history"]] == ["user", "model"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_errors_are_classified(self, service, mock_google_ai_client):
        chat = Mock()
        chat.send_message_stream = AsyncMock(side_effect=FakeAPIError("unavailable", code=503))
        mock_google_ai_client.aio.chats.create.return_value = chat

        with pytest.raises(TransientBackendError):
            async for _ in service.stream_chat_response([], "Salam"):
                pass
