from unittest.mock import MagicMock

import pytest

from backend.ai_service.client import (
    GeminiTextGenerator,
    OpenAITextGenerator,
    build_text_generator,
)
from backend.gateway.server import create_app


def test_chatbot_success(client, text_generator):
    response = client.post("/chatbot", json={"query": "What is eczema?"})

    assert response.status_code == 200
    assert response.get_json() == {"response": "Hello from the model"}
    text_generator.generate.assert_called_once_with("What is eczema?")


@pytest.mark.parametrize("payload", [{}, {"query": ""}, {"query": "   "}, {"query": 42}])
def test_chatbot_empty_query(client, text_generator, payload):
    response = client.post("/chatbot", json=payload)

    assert response.status_code == 400
    assert response.get_json()["error"] == "Prompt required"
    text_generator.generate.assert_not_called()


def test_chatbot_upstream_error(client, text_generator):
    text_generator.generate.return_value = (None, "quota exceeded")

    response = client.post("/chatbot", json={"query": "Hello"})

    assert response.status_code == 500
    assert response.get_json() == {"error": "Chatbot error"}


def test_chatbot_no_service_configured(users, prediction_client, mocker):
    from backend.database.db_connection import UserStore

    mocker.patch("backend.gateway.server.build_text_generator", return_value=None)
    app = create_app(
        config={"TESTING": True},
        user_store=UserStore(users),
        prediction_client=prediction_client,
    )

    response = app.test_client().post("/chatbot", json={"query": "Hello"})

    assert response.status_code == 500
    assert "AI service is not configured" in response.get_json()["error"]


def test_gemini_generator_success(mocker):
    mock_client = MagicMock()
    mock_client.models.generate_content.return_value.text = "Hello from Gemini!"
    mocker.patch("backend.ai_service.client.genai.Client", return_value=mock_client)

    generator = GeminiTextGenerator("key")
    text, err = generator.generate("Hi")

    assert (text, err) == ("Hello from Gemini!", None)
    mock_client.models.generate_content.assert_called_once_with(model="gemini-1.5-flash", contents="Hi")


def test_gemini_generator_failure(mocker):
    mock_client = MagicMock()
    mock_client.models.generate_content.side_effect = Exception("503 UNAVAILABLE")
    mocker.patch("backend.ai_service.client.genai.Client", return_value=mock_client)

    text, err = GeminiTextGenerator("key").generate("Hi")

    assert text is None
    assert "503" in err


def test_openai_generator_success(mocker):
    mock_openai = MagicMock()
    mock_openai.chat.completions.create.return_value.choices[0].message.content = "Hello!"
    mocker.patch("backend.ai_service.client.OpenAI", return_value=mock_openai)

    text, err = OpenAITextGenerator("key").generate("Hi")

    assert (text, err) == ("Hello!", None)
    _, kwargs = mock_openai.chat.completions.create.call_args
    assert kwargs["model"] == "gpt-4o-mini"
    assert kwargs["messages"] == [{"role": "user", "content": "Hi"}]


def test_openai_generator_failure(mocker):
    mock_openai = MagicMock()
    mock_openai.chat.completions.create.side_effect = Exception("timeout")
    mocker.patch("backend.ai_service.client.OpenAI", return_value=mock_openai)

    text, err = OpenAITextGenerator("key").generate("Hi")

    assert text is None
    assert err == "timeout"


def test_build_prefers_gemini(mocker):
    mocker.patch("backend.ai_service.client.genai.Client")
    mocker.patch("backend.ai_service.client.OpenAI")

    generator = build_text_generator({"GEMINI_API_KEY": "g", "OPENAI_API_KEY": "o"})

    assert generator.name == "gemini"


def test_build_explicit_openai(mocker):
    mocker.patch("backend.ai_service.client.genai.Client")
    mocker.patch("backend.ai_service.client.OpenAI")

    generator = build_text_generator({"AI_PROVIDER": "openai", "GEMINI_API_KEY": "g", "OPENAI_API_KEY": "o"})

    assert generator.name == "openai"


def test_build_falls_back_to_openai(mocker):
    mocker.patch("backend.ai_service.client.genai.Client", side_effect=Exception("bad key"))
    mocker.patch("backend.ai_service.client.OpenAI")

    generator = build_text_generator({"GEMINI_API_KEY": "g", "OPENAI_API_KEY": "o"})

    assert generator.name == "openai"


def test_build_without_keys():
    assert build_text_generator({}) is None
