import base64
import json
from urllib.parse import parse_qs

import pytest
import requests
import responses

from storefeed.imgbb import (
    UPLOAD_URL,
    ImgbbClient,
    ImgbbResponse,
    download_file,
    picture_to_base64,
)


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def test_upload_sends_form_and_parses_reply(mocked):
    mocked.add(
        responses.POST,
        UPLOAD_URL,
        json={
            "data": {"id": "abc", "url": "https://i.example.com/abc.jpg", "width": 10,
                     "image": {"filename": "abc.jpg"}},
            "success": True,
            "status": 200,
        },
    )
    client = ImgbbClient(api_key="placeholder")
    result = client.upload("AAAA", "pic", 600)

    body = parse_qs(mocked.calls[0].request.body)
    assert body["key"] == ["placeholder"]
    assert body["image"] == ["AAAA"]
    assert body["name"] == ["pic"]
    assert body["expiration"] == ["600"]
    assert result.success is True
    assert result.data.id == "abc"
    assert result.data.width == 10
    assert result.data.image.filename == "abc.jpg"


def test_upload_without_expiration_omits_field(mocked):
    mocked.add(responses.POST, UPLOAD_URL, json={"status_code": 400,
               "error": {"message": "bad", "code": 100}, "status_txt": "Bad Request"})
    result = ImgbbClient(api_key="placeholder").upload("AAAA", "pic", 0)
    body = parse_qs(mocked.calls[0].request.body)
    assert "expiration" not in body
    assert result.success is False
    assert result.error.message == "bad"
    assert result.error.code == 100


def test_upload_invalid_json_raises(mocked):
    mocked.add(responses.POST, UPLOAD_URL, body="not json")
    with pytest.raises((ValueError, requests.exceptions.JSONDecodeError)):
        ImgbbClient(api_key="placeholder").upload("AAAA", "pic", 0)


def test_response_from_json_defaults():
    result = ImgbbResponse.from_json(json.loads("{}"))
    assert result.success is False
    assert result.data.url == ""


def test_picture_to_base64_round_trip(tmp_path):
    data = bytes(range(256))
    path = tmp_path / "pic.bin"
    path.write_bytes(data)
    assert base64.b64decode(picture_to_base64(path)) == data


def test_picture_to_base64_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        picture_to_base64(tmp_path / "missing.jpg")


def test_download_file_writes_body(mocked, tmp_path):
    payload = b"\x89PNG image bytes"
    mocked.add(responses.GET, "https://files.example.com/a.png", body=payload)
    target = tmp_path / "a.png"
    download_file(target, "https://files.example.com/a.png")
    assert target.read_bytes() == payload