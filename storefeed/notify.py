"""Telegram notifications tagged with a service name."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import requests

API_BASE = "https://api.telegram.org"


@dataclass
class NotifierConfig:
    """Settings of a notifier: service name, target chat and bot token."""

    name: str = ""
    chat_id: str = ""
    token: str = ""


class Notifier:
    """Sends messages titled with the service name to one Telegram chat."""

    def __init__(self, config: NotifierConfig, session: requests.Session | None = None) -> None:
        self.name = config.name
        self._token = config.token
        self._session = session or requests.Session()

        try:
            self._call("getMe", {})
        except RuntimeError as exc:
            raise RuntimeError(f"telegram service: {exc}") from exc

        try:
            self.chat_id = int(config.chat_id, 10)
        except ValueError as exc:
            raise ValueError(f"notification service: {exc}") from exc

        try:
            self.send("Start service")
        except RuntimeError as exc:
            raise RuntimeError(f"notify.Send: {exc}") from exc

    def _call(self, method: str, payload: dict[str, Any]) -> Any:
        response = self._session.post(f"{API_BASE}/bot{self._token}/{method}", json=payload)
        try:
            body = response.json()
        except ValueError as exc:
            raise RuntimeError(f"{method}: invalid response") from exc
        if not body.get("ok"):
            raise RuntimeError(f"{method}: {body.get('description', '')}")
        return body.get("result")

    def send(self, message: str) -> None:
        """Send ``message`` with the service name as its first line."""
        self._call(
            "sendMessage",
            {"chat_id": self.chat_id, "text": f"{self.name}\n{message}", "parse_mode": "HTML"},
        )