"""Telegram bot helpers: messages, photo albums, editable messages and link checker."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Sequence

import requests

log = logging.getLogger(__name__)

API_BASE = "https://api.telegram.org"
MEDIA_GROUP_SIZE = 9
POLL_TIMEOUT = 60


class TelegramError(Exception):
    """Raised when the Bot API rejects a request."""


class TelegramService:
    """A bot bound to one chat."""

    def __init__(self, token: str, chat_id: int, session: requests.Session | None = None) -> None:
        self._token = token
        self.chat_id = chat_id
        self._session = session or requests.Session()
        try:
            self._call("getMe")
        except (TelegramError, requests.RequestException) as exc:
            raise TelegramError(f"telegram: auth bot: {exc}") from exc

    def _call(self, method: str, payload: dict[str, Any] | None = None, timeout: float | None = None) -> Any:
        response = self._session.post(
            f"{API_BASE}/bot{self._token}/{method}", json=payload or {}, timeout=timeout
        )
        try:
            body = response.json()
        except ValueError as exc:
            raise TelegramError(f"{method}: invalid response") from exc
        if not body.get("ok"):
            raise TelegramError(f"{method}: {body.get('description', '')}")
        return body.get("result")

    def message(self, text: str) -> None:
        """Send a text message to the chat."""
        self._call("sendMessage", {"chat_id": self.chat_id, "text": text})

    def message_photo(self, caption: str, images: Sequence[str]) -> None:
        """Send images as albums of at most nine, captioned on the first image.

        Albums that fail to send are logged and skipped.
        """
        media = [{"type": "photo", "media": url} for url in images]
        if media:
            media[0]["caption"] = caption
        for start in range(0, len(media), MEDIA_GROUP_SIZE):
            if start:
                time.sleep(1)
            chunk = media[start : start + MEDIA_GROUP_SIZE]
            try:
                self._call("sendMediaGroup", {"chat_id": self.chat_id, "media": chunk})
            except (TelegramError, requests.RequestException) as exc:
                log.error("send error: %s", exc)

    def new_checker(self, start_message: str, keyboard: Mapping[str, Any]) -> "Checker":
        """Post a message with an inline keyboard and return a checker for it."""
        result = self._call(
            "sendMessage",
            {"chat_id": self.chat_id, "text": start_message, "reply_markup": dict(keyboard)},
        )
        return Checker(message_id=result["message_id"], service=self)

    def new_update_message(self, text: str) -> "UpdateMessage":
        """Post a message that can later be edited in place."""
        result = self._call("sendMessage", {"chat_id": self.chat_id, "text": text})
        return UpdateMessage(message_id=result["message_id"], service=self)


@dataclass
class Checker:
    """Answers inline keyboard presses with the result of a parse function."""

    message_id: int
    service: TelegramService

    def _handle(self, update: Mapping[str, Any], parse: Callable[[str], str]) -> None:
        query = update.get("callback_query")
        if not query:
            return
        data = query.get("data", "")
        self.service._call("answerCallbackQuery", {"callback_query_id": query["id"], "text": data})

        try:
            text = parse(data)
        except Exception as exc:  # any failure of the parser is reported to the chat
            text = f"ERROR parse!\n{data}\nErr: {exc}"

        chat_id = query["message"]["chat"]["id"]
        try:
            self.service._call("sendMessage", {"chat_id": chat_id, "text": text})
        except (TelegramError, requests.RequestException) as exc:
            log.warning("send failed: %s", exc)

    def run(self, parse: Callable[[str], str]) -> None:
        """Poll for button presses and reply to each with ``parse(callback_data)``.

        Returns only when answering a button press fails.
        """
        offset = 0
        try:
            while True:
                try:
                    updates = self.service._call(
                        "getUpdates",
                        {"offset": offset, "timeout": POLL_TIMEOUT},
                        timeout=POLL_TIMEOUT + 30,
                    )
                except (TelegramError, requests.RequestException) as exc:
                    log.warning("failed to get updates, retrying in 3 seconds: %s", exc)
                    time.sleep(3)
                    continue
                for update in updates or []:
                    offset = max(offset, update["update_id"] + 1)
                    self._handle(update, parse)
        except (TelegramError, requests.RequestException) as exc:
            log.error("Recovered in run checker service %s", exc)


@dataclass
class UpdateMessage:
    """A posted message whose text can be replaced."""

    message_id: int
    service: TelegramService

    def update(self, text: str) -> None:
        """Replace the text of the message."""
        self.service._call(
            "editMessageText",
            {"chat_id": self.service.chat_id, "message_id": self.message_id, "text": text},
        )


def build_keyboard(ping_links: Mapping[str, Sequence[str]]) -> dict[str, Any]:
    """Build an inline keyboard with one row per tag and a ``<tag>_<n>`` button per link."""
    rows = [
        [{"text": f"{tag}_{index}", "callback_data": f"{tag}_{index}"} for index, _ in enumerate(links)]
        for tag, links in ping_links.items()
    ]
    return {"inline_keyboard": rows}