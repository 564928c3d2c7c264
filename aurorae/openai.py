"""Bridge to a chat-completion service for strategic advice."""

from __future__ import annotations

from typing import Any

import requests

CHAT_COMPLETIONS_ENDPOINT = "https://api.openai.com/v1/chat/completions"
MODEL = "gpt-4"
MAX_TOKENS = 512
TEMPERATURE = 0.7
SYSTEM_PROMPT = (
    "Tu es un stratège IA pour une entité blockchain vivante et autonome."
)


class StrategyError(Exception):
    """Raised when no strategy could be obtained."""


def _extract_content(data: Any) -> str | None:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    return content if isinstance(content, str) else None


class OpenAIBridge:
    """Asks a chat-completion endpoint for strategic recommendations."""

    def __init__(
        self,
        api_key: str,
        endpoint: str = CHAT_COMPLETIONS_ENDPOINT,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.endpoint = endpoint
        self.session = session or requests.Session()

    def _request_body(self, question: str) -> dict[str, Any]:
        return {
            "model": MODEL,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": question},
            ],
            "max_tokens": MAX_TOKENS,
            "temperature": TEMPERATURE,
        }

    def ask_strategy(self, question: str) -> str:
        """Send a question and return the first answer's text."""
        try:
            response = self.session.post(
                self.endpoint,
                json=self._request_body(question),
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
        except requests.RequestException as exc:
            raise StrategyError(f"Erreur réseau: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise StrategyError(f"Erreur JSON: {exc}") from exc

        content = _extract_content(data)
        if content is None:
            raise StrategyError("Aucune réponse valide obtenue")
        return content