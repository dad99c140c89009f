from __future__ import annotations  # Text generation gateway for the Ollama chat endpoint

import logging
from typing import Any, Callable, Dict, Optional, Protocol, Sequence, Tuple

import httpx
from langchain_core.messages import BaseMessage

from config import LlmRoute


logger = logging.getLogger(__name__)  # Module logger setup


class HttpClient(Protocol):  # Minimal HTTP client protocol
    def post(self, url: str, *, json: Dict[str, Any], headers: Dict[str, str], timeout: float) -> "HttpResponse": ...


class HttpResponse(Protocol):  # Minimal HTTP response protocol
    @property
    def status_code(self) -> int: ...

    def json(self) -> Any: ...

    @property
    def text(self) -> str: ...


class LlmGatewayError(RuntimeError):  # Base gateway error
    pass


def generate(
    system: str,
    user: str,
    *,
    cfg: LlmRoute,
    client: Optional[HttpClient] = None,
) -> str:  # Send one system/user pair and return the reply text
    return chat(
        [{"role": "system", "content": system}, {"role": "user", "content": user}],
        cfg=cfg,
        client=client,
    )


def chat(
    messages: Sequence[Dict[str, str]] | Sequence[BaseMessage],
    *,
    cfg: LlmRoute,
    client: Optional[HttpClient] = None,
) -> str:
    """Issue a single non-streaming chat request.

    Raises ``LlmGatewayError`` on transport failures, error statuses, non-JSON
    payloads and replies without usable text. There is no retry.
    """

    payload_messages = _normalize_messages(messages)
    payload: Dict[str, Any] = {"model": cfg.model, "messages": payload_messages, "stream": False}
    if cfg.options:
        payload["options"] = dict(cfg.options)
    headers = {"Content-Type": "application/json"}
    headers.update(cfg.extra_headers)
    preview = _preview(payload_messages)
    if len(preview) > 120:
        preview = preview[:117] + "..."
    logger.info("LLM request send route=%s model=%s preview=%s", cfg.name, cfg.model, preview)
    try:
        response, close_cb = _post(f"{cfg.base_url}{cfg.endpoint}", payload, headers, cfg.timeout_s, client)
    except Exception as exc:  # noqa: BLE001
        logger.error("LLM transport failure: %s", exc)
        raise LlmGatewayError("LLM transport failed") from exc
    try:
        if response.status_code >= 400:
            logger.error("LLM error status: %s", response.status_code)
            raise LlmGatewayError(f"LLM returned status {response.status_code}")
        try:
            data = response.json()
        except Exception as exc:  # noqa: BLE001
            logger.error("Invalid JSON payload from LLM: %s", exc)
            raise LlmGatewayError("LLM payload was not JSON") from exc
        content = _strip_code_fences(_extract_content(data))
        if not content:
            raise LlmGatewayError("LLM response was empty")
        logger.info("LLM request done route=%s model=%s chars=%d", cfg.name, cfg.model, len(content))
        return content
    finally:
        _close_safely(close_cb)


def _post(url: str, payload: Dict[str, Any], headers: Dict[str, str], timeout: float, client: Optional[HttpClient]) -> Tuple[HttpResponse, Optional[Callable[[], None]]]:  # Dispatch HTTP request
    if client is not None:
        return client.post(url, json=payload, headers=headers, timeout=timeout), None
    http_client = httpx.Client(timeout=timeout)
    try:
        response = http_client.post(url, json=payload, headers=headers)
    except Exception:
        http_client.close()
        raise
    return response, http_client.close


def _close_safely(close_cb: Optional[Callable[[], None]]) -> None:  # Close HTTP client callback when provided
    if close_cb is not None:
        close_cb()


def _normalize_messages(messages: Sequence[Any]) -> list[Dict[str, str]]:  # Ensure message payload shape
    normalized: list[Dict[str, str]] = []
    for item in messages:
        if isinstance(item, BaseMessage):
            item = _message_dict(item)
        if not isinstance(item, dict):
            raise TypeError("Each chat message must be a dict with role/content")
        role = str(item.get("role", "")).strip()
        content = str(item.get("content", ""))
        if not role:
            raise ValueError("Chat message missing role")
        normalized.append({"role": role, "content": content})
    return normalized


def _message_dict(message: BaseMessage) -> Dict[str, str]:  # Map LangChain BaseMessage to role/content dict
    role = message.type
    if role == "human":
        role = "user"
    elif role == "ai":
        role = "assistant"
    content = message.content
    if not isinstance(content, str):
        content = str(content)
    return {"role": role, "content": content}


def _preview(messages: Sequence[Dict[str, str]]) -> str:  # Build preview string for logging
    for message in reversed(messages):
        text = message.get("content", "").strip()
        if text:
            return text.splitlines()[0]
    return ""


def _extract_content(data: Any) -> str:  # Extract text from Ollama chat/generate or OpenAI-style payloads
    if isinstance(data, dict):
        message = data.get("message")
        if isinstance(message, dict) and isinstance(message.get("content"), str):
            return message["content"].strip()
        if isinstance(data.get("response"), str):
            return data["response"].strip()
        choices = data.get("choices")
        if isinstance(choices, list) and choices:
            first = choices[0].get("message") if isinstance(choices[0], dict) else None
            content = first.get("content") if isinstance(first, dict) else None
            if isinstance(content, str):
                return content.strip()
    raise LlmGatewayError("LLM response missing content")


def _strip_code_fences(content: str) -> str:  # Remove common markdown fences from LLM output
    text = content.strip()
    if text.startswith("```"):
        lines = text.splitlines()
        if lines:
            lines = lines[1:]
            while lines and lines[-1].strip() == "":
                lines = lines[:-1]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            text = "\n".join(lines).strip()
    return text
