import pytest
from langchain_core.messages import HumanMessage, SystemMessage

from config import LlmRoute
from llm_gateway import LlmGatewayError, chat, generate


class FakeResponse:
    def __init__(self, status_code=200, data=None, text=""):
        self.status_code = status_code
        self._data = data
        self.text = text

    def json(self):
        if isinstance(self._data, Exception):
            raise self._data
        return self._data


class FakeClient:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def post(self, url, *, json, headers, timeout):
        self.requests.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        if self.error:
            raise self.error
        return self.response


ROUTE = LlmRoute(name="ollama", base_url="http://llm.local", endpoint="/api/chat", model="llama3", timeout_s=5)


def test_generate_posts_system_and_user_messages():
    client = FakeClient(FakeResponse(data={"message": {"role": "assistant", "content": " Explain REST. "}}))

    text = generate("be brief", "ask something", cfg=ROUTE, client=client)

    assert text == "Explain REST."
    request = client.requests[0]
    assert request["url"] == "http://llm.local/api/chat"
    assert request["json"]["stream"] is False
    assert request["json"]["model"] == "llama3"
    assert [m["role"] for m in request["json"]["messages"]] == ["system", "user"]
    assert request["timeout"] == 5


def test_generate_endpoint_shape_and_code_fences():
    client = FakeClient(FakeResponse(data={"response": "```\nWhat is a mutex?\n```"}))

    assert generate("s", "u", cfg=ROUTE, client=client) == "What is a mutex?"


def test_langchain_messages_are_mapped():
    client = FakeClient(FakeResponse(data={"message": {"content": "ok"}}))

    chat([SystemMessage(content="rules"), HumanMessage(content="hello")], cfg=ROUTE, client=client)

    roles = [m["role"] for m in client.requests[0]["json"]["messages"]]
    assert roles == ["system", "user"]


@pytest.mark.parametrize(
    "response",
    [
        FakeResponse(status_code=503, data={}),
        FakeResponse(data=ValueError("not json")),
        FakeResponse(data={"message": {"content": ""}}),
        FakeResponse(data={"unexpected": True}),
    ],
)
def test_unusable_responses_raise(response):
    with pytest.raises(LlmGatewayError):
        generate("s", "u", cfg=ROUTE, client=FakeClient(response))


def test_transport_errors_raise_gateway_error():
    client = FakeClient(error=ConnectionError("refused"))

    with pytest.raises(LlmGatewayError):
        generate("s", "u", cfg=ROUTE, client=client)
