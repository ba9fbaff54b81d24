"""Client for the imgbb image hosting upload API."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import requests

UPLOAD_URL = "https://api.imgbb.com/1/upload"


@dataclass
class ImgbbImage:
    """A stored image rendition."""

    filename: str = ""
    name: str = ""
    mime: str = ""
    extension: str = ""
    url: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any] | None) -> "ImgbbImage":
        data = data or {}
        return cls(
            filename=data.get("filename", ""),
            name=data.get("name", ""),
            mime=data.get("mime", ""),
            extension=data.get("extension", ""),
            url=data.get("url", ""),
        )


@dataclass
class ImgbbData:
    """Details of an uploaded image."""

    id: str = ""
    title: str = ""
    url_viewer: str = ""
    url: str = ""
    display_url: str = ""
    width: int = 0
    height: int = 0
    size: int = 0
    time: int = 0
    expiration: int = 0
    image: ImgbbImage = field(default_factory=ImgbbImage)
    thumb: ImgbbImage = field(default_factory=ImgbbImage)
    delete_url: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any] | None) -> "ImgbbData":
        data = data or {}
        return cls(
            id=data.get("id", ""),
            title=data.get("title", ""),
            url_viewer=data.get("url_viewer", ""),
            url=data.get("url", ""),
            display_url=data.get("display_url", ""),
            width=int(data.get("width", 0) or 0),
            height=int(data.get("height", 0) or 0),
            size=int(data.get("size", 0) or 0),
            time=int(data.get("time", 0) or 0),
            expiration=int(data.get("expiration", 0) or 0),
            image=ImgbbImage.from_json(data.get("image")),
            thumb=ImgbbImage.from_json(data.get("thumb")),
            delete_url=data.get("delete_url", ""),
        )


@dataclass
class ImgbbErrorInfo:
    """Error block of a failed upload."""

    message: str = ""
    code: int = 0


@dataclass
class ImgbbResponse:
    """Server reply to an upload request."""

    data: ImgbbData = field(default_factory=ImgbbData)
    success: bool = False
    status: int = 0
    status_code: int = 0
    error: ImgbbErrorInfo = field(default_factory=ImgbbErrorInfo)
    status_txt: str = ""

    @classmethod
    def from_json(cls, payload: dict[str, Any]) -> "ImgbbResponse":
        error = payload.get("error") or {}
        if not isinstance(error, dict):
            error = {"message": str(error)}
        return cls(
            data=ImgbbData.from_json(payload.get("data")),
            success=bool(payload.get("success", False)),
            status=int(payload.get("status", 0) or 0),
            status_code=int(payload.get("status_code", 0) or 0),
            error=ImgbbErrorInfo(
                message=error.get("message", ""), code=int(error.get("code", 0) or 0)
            ),
            status_txt=payload.get("status_txt", ""),
        )


class ImgbbClient:
    """Uploads images with an imgbb API key."""

    def __init__(self, api_key: str, session: requests.Session | None = None) -> None:
        self.api_key = api_key
        self.session = session or requests.Session()

    def upload(self, picture_base64: str, name: str, expiration: int = 0) -> ImgbbResponse:
        """Upload a base64-encoded picture; ``expiration`` of 0 keeps it forever."""
        form = {"key": self.api_key, "image": picture_base64, "name": name}
        if expiration != 0:
            form["expiration"] = str(expiration)
        response = self.session.post(UPLOAD_URL, data=form)
        return ImgbbResponse.from_json(response.json())


def picture_to_base64(filename: str | Path) -> str:
    """Read a file and return its contents as standard base64 text."""
    return base64.b64encode(Path(filename).read_bytes()).decode("ascii")


def download_file(path: str | Path, url: str) -> None:
    """Download ``url`` and write the body to ``path``."""
    with requests.get(url, stream=True) as response, open(path, "wb") as out:
        for chunk in response.iter_content(chunk_size=65536):
            out.write(chunk)