"""OpenAI chat completions restricted to JSON output."""

import json
from typing import Any, TypeVar

from openai import AsyncOpenAI
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from reactiongif.utils.exceptions import ExternalServiceError
from reactiongif.utils.logging import get_logger

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

SCHEMA_INSTRUCTION = (
    "Respond with a single JSON object that validates against this JSON schema. "
    "Do not wrap it in markdown.\n{schema}"
)


class OpenAIClient:
    """Wrapper for OpenAI chat completions with schema-validated JSON output."""

    def __init__(
        self,
        api_key: str,
        default_model: str = "gpt-4o-mini",
        max_completion_tokens: int = 4000,
        temperature: float | None = None,
    ):
        """Create the client; no request is made until the first completion.

        Args:
            api_key: OpenAI API key
            default_model: Model used when a call site does not name one
            max_completion_tokens: Completion token cap, reasoning tokens included
            temperature: Sampling temperature, omitted from requests when None
        """
        self.default_model = default_model
        self.max_completion_tokens = max_completion_tokens
        self.temperature = temperature

        # No SDK-level retries: a failed call is that stage's terminal error
        self._client = AsyncOpenAI(api_key=api_key, max_retries=0)
        self._api_key = api_key

    @property
    def is_configured(self) -> bool:
        """Whether an API key is set."""
        return bool(self._api_key)

    async def close(self) -> None:
        """Close the SDK's connection pool."""
        await self._client.close()

    async def complete_json(
        self,
        prompt: str,
        system_prompt: str | None = None,
        model: str | None = None,
    ) -> dict[str, Any]:
        """Generate a JSON object completion.

        Args:
            prompt: User prompt
            system_prompt: System instruction, must mention JSON
            model: Override the default model

        Returns:
            Parsed JSON response

        Raises:
            ExternalServiceError: If the request fails or the reply is not a JSON object
        """
        messages: list[dict[str, str]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        request: dict[str, Any] = {
            "model": model or self.default_model,
            "messages": messages,
            "max_completion_tokens": self.max_completion_tokens,
            "response_format": {"type": "json_object"},
        }
        if self.temperature is not None:
            request["temperature"] = self.temperature

        logger.info("openai_request", model=request["model"], user_prompt=prompt[:500])

        try:
            response = await self._client.chat.completions.create(**request)
        except Exception as e:
            logger.error("openai_request_failed", model=request["model"], error=str(e))
            raise ExternalServiceError(
                message="OpenAI request failed",
                service="openai",
                details={"error": str(e), "model": request["model"]},
            ) from e

        if response.usage is not None:
            logger.info(
                "openai_usage",
                model=request["model"],
                prompt_tokens=response.usage.prompt_tokens,
                completion_tokens=response.usage.completion_tokens,
                total_tokens=response.usage.total_tokens,
            )

        content = response.choices[0].message.content
        if not content:
            raise ExternalServiceError(message="Empty response from OpenAI", service="openai")

        logger.debug("openai_response", response=content[:1000])

        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            logger.error("openai_invalid_json", content=content[:200])
            raise ExternalServiceError(
                message="OpenAI reply was not valid JSON",
                service="openai",
                details={"error": str(e), "content": content[:200]},
            ) from e

    async def complete_structured(
        self,
        prompt: str,
        schema: type[ModelT],
        model: str | None = None,
        system_prompt: str | None = None,
    ) -> ModelT:
        """Generate a completion and validate it against a pydantic model.

        The model's JSON schema is appended to the system prompt so the
        completion knows the exact shape to produce.

        Raises:
            ExternalServiceError: If the response does not satisfy ``schema``
        """
        instruction = SCHEMA_INSTRUCTION.format(
            schema=json.dumps(schema.model_json_schema(), indent=2)
        )
        system = f"{system_prompt}\n\n{instruction}" if system_prompt else instruction

        data = await self.complete_json(prompt, system_prompt=system, model=model)

        try:
            return schema.model_validate(data)
        except PydanticValidationError as e:
            logger.error("openai_schema_violation", schema=schema.__name__, error=str(e))
            raise ExternalServiceError(
                message=f"OpenAI response did not match {schema.__name__}",
                service="openai",
                details={"error": str(e)},
            ) from e
