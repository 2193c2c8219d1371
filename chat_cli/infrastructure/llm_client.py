"""Chat-completion client using LiteLLM."""

from typing import Any, AsyncIterator

from litellm import acompletion
from loguru import logger

from chat_cli.errors import NoResponseError
from chat_cli.models.config import ChatConfig
from chat_cli.models.message import Fragment, Message, Role


def _role_or_none(value: Any) -> Role | None:
    if not value:
        return None
    return Role.from_api(str(value))


class LLMClient:
    """Async chat-completion client with streaming support."""

    def __init__(self, config: ChatConfig) -> None:
        """Initialize LLM client.

        Args:
            config: Chat configuration carrying model and credential
        """
        self.model = config.model
        self.temperature = config.temperature
        self.max_tokens = config.max_tokens
        self.api_key = config.api_key.get_secret_value() if config.api_key else None

    def _request_kwargs(self, messages: list[Message]) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": [message.to_api() for message in messages],
        }
        if self.api_key:
            kwargs["api_key"] = self.api_key
        if self.temperature is not None:
            kwargs["temperature"] = self.temperature
        if self.max_tokens is not None:
            kwargs["max_tokens"] = self.max_tokens
        return kwargs

    async def stream(self, messages: list[Message]) -> AsyncIterator[Fragment]:
        """Stream a reply as fragments.

        Args:
            messages: Conversation to send

        Yields:
            Fragments in arrival order

        Raises:
            UnsupportedRoleError: If a chunk carries a function/tool role
        """
        logger.info(f"LLM stream call: model={self.model}, messages={len(messages)}")

        response = await acompletion(stream=True, **self._request_kwargs(messages))
        async for chunk in response:
            if not chunk.choices:
                continue
            choice = chunk.choices[0]
            delta = choice.delta
            yield Fragment(
                role=_role_or_none(getattr(delta, "role", None)),
                content=getattr(delta, "content", None),
                is_final=choice.finish_reason is not None,
            )

    async def complete(self, messages: list[Message]) -> Message:
        """Request a reply in one piece.

        Args:
            messages: Conversation to send

        Returns:
            The reply message

        Raises:
            NoResponseError: If the reply has no content
            UnsupportedRoleError: If the reply has a function/tool role
        """
        logger.info(f"LLM call: model={self.model}, messages={len(messages)}")

        response = await acompletion(**self._request_kwargs(messages))
        if not response.choices:
            raise NoResponseError("The chat service returned no choices")

        returned = response.choices[0].message
        content = returned.content or ""
        if not content.strip():
            raise NoResponseError("The chat service returned an empty message")

        message = Message(role=Role.from_api(returned.role), content=content)
        usage = getattr(response, "usage", None)
        if usage is not None:
            logger.info(
                f"LLM response: tokens={usage.total_tokens} "
                f"(prompt={usage.prompt_tokens}, completion={usage.completion_tokens})"
            )
        return message
