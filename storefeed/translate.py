"""Machine translation of product texts through the cloud translation API."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Sequence

import requests

from .models import Product

IAM_URL = "https://iam.api.cloud.yandex.net/iam/v1/tokens"
TRANSLATE_URL = "https://translate.api.cloud.yandex.net/translate/v2/translate"


class TranslateError(Exception):
    """Raised when a token or a translation cannot be obtained."""


def _decode(response: requests.Response) -> dict[str, Any]:
    try:
        payload = response.json()
    except ValueError as exc:
        raise TranslateError(f"invalid response: {exc}") from exc
    if not isinstance(payload, dict):
        raise TranslateError("invalid response: not an object")
    return payload


def request_iam_token(oauth_token: str) -> str:
    """Exchange an OAuth token for a short-lived IAM token."""
    response = requests.post(
        IAM_URL,
        json={"yandexPassportOauthToken": oauth_token},
        headers={"Content-Type": "Application/json"},
    )
    token = _decode(response).get("iamToken") or ""
    if not token:
        raise TranslateError("IAM: nil Token")
    return token


@dataclass
class Translator:
    """Translates texts within one cloud folder using an IAM token."""

    folder_id: str
    iam: str
    oauth_token: str
    session: requests.Session = field(default_factory=requests.Session, repr=False)

    @classmethod
    def from_oauth(cls, folder_id: str, oauth_token: str) -> "Translator":
        """Obtain an IAM token and build a translator."""
        iam = request_iam_token(oauth_token)
        if not folder_id or not iam or not oauth_token:
            raise TranslateError("Translate: New: Invalid input data")
        return cls(folder_id=folder_id, iam=iam, oauth_token=oauth_token)

    def _request(self, texts: Sequence[str], target: str) -> list[str]:
        response = self.session.post(
            TRANSLATE_URL,
            json={
                "folderId": self.folder_id,
                "texts": list(texts),
                "targetLanguageCode": target,
            },
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self.iam}",
            },
        )
        payload = _decode(response)
        message = payload.get("message") or ""
        if message:
            raise TranslateError(message)
        return [entry.get("text", "") for entry in payload.get("translations") or []]

    def translate(self, texts: Sequence[str]) -> list[str]:
        """Translate every text into Russian, keeping the order."""
        return self._request(texts, "ru")

    def translate_to_english(self, text: str) -> str:
        """Translate a single text into English."""
        translations = self._request([text], "en")
        if not translations:
            raise TranslateError("empty translation")
        return translations[0]

    def _translate_one(self, text: str, what: str) -> str:
        translations = self.translate([text])
        if len(translations) != 1:
            raise TranslateError(f"{what} != 1")
        return translations[0]

    def translate_product(self, product: Product) -> Product:
        """Return a copy of ``product`` with its texts translated into Russian."""
        result = copy.deepcopy(product)

        result.description.eng = result.description.eng.replace("\t", "").replace("#", "")

        lowered = result.name.lower()
        if lowered:
            result.name = lowered[0].upper() + lowered[1:]

        result.full_name = result.full_name.replace("SKU:", "")

        result.name = self._translate_one(result.name, "name: len(Name)")

        if result.full_name:
            result.full_name = self._translate_one(
                result.full_name, "fullName: len(FullName)"
            )

        if result.description.eng:
            result.description.rus = self._translate_one(
                result.description.eng, "description: len(FullName)"
            )

        if result.items:
            colors = self.translate([item.color_eng for item in result.items])
            if len(colors) != len(result.items):
                raise TranslateError("items: translation count mismatch")
            for item, color in zip(result.items, colors):
                item.color_rus = color

        return result