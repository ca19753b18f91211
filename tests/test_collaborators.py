import json

import pytest

from cropsim.config import Settings
from cropsim.library.collaborators import (
    FALLBACK_ASSESSMENT,
    ChatRole,
    PayloadValidationError,
    UpstreamError,
    ensure_upstream_ok,
    parse_assessment,
    validate_chat_payload,
    validate_image_payload,
)

SETTINGS = Settings()
PNG = "data:image/png;base64," + "A" * 64


def _message(role="user", content="hello"):
    return {"role": role, "content": content}


def test_valid_image_passes_through():
    assert validate_image_payload(PNG, SETTINGS) == PNG
    url = "https://example.org/field.jpg"
    assert validate_image_payload(url, SETTINGS) == url


@pytest.mark.parametrize(
    "image, message",
    [
        (None, "Invalid image data"),
        ("", "Invalid image data"),
        (123, "Invalid image data"),
        ("data:image/png;base64,", "Invalid image data format"),
        ("data:image/png;base64", "Invalid image data format"),
        ("data:image/bmp;base64,AAAA", "Invalid image format. Use JPEG, "
         "PNG, WebP, or GIF"),
        ("data:text/plain;base64,AAAA", "Invalid image format. Use JPEG, "
         "PNG, WebP, or GIF"),
    ],
)
def test_invalid_images(image, message):
    with pytest.raises(PayloadValidationError) as exc:
        validate_image_payload(image, SETTINGS)
    assert exc.value.message == message
    assert exc.value.status_code == 400
    assert isinstance(exc.value, ValueError)


def test_image_size_limit():
    limit = SETTINGS.image_max_bytes
    ok = "data:image/jpeg;base64," + "A" * (limit * 4 // 3)
    validate_image_payload(ok, SETTINGS)
    too_big = "data:image/jpeg;base64," + "A" * (limit * 4 // 3 + 4)
    with pytest.raises(PayloadValidationError) as exc:
        validate_image_payload(too_big, SETTINGS)
    assert exc.value.message == "Image too large. Maximum 5MB allowed"


def test_parse_valid_assessment():
    text = json.dumps(
        {
            "healthScore": 62,
            "findings": ["Yellowing on lower leaves"],
            "recommendations": ["Apply nitrogen"],
        }
    )
    assessment = parse_assessment(text)
    assert assessment.health_score == 62
    assert assessment.findings == ["Yellowing on lower leaves"]


@pytest.mark.parametrize(
    "text",
    [
        "The field looks healthy!",
        '{"healthScore": 140, "findings": [], "recommendations": []}',
        '{"findings": []}',
        "",
        None,
    ],
)
def test_unparseable_assessment_falls_back(text):
    assessment = parse_assessment(text)
    assert assessment == FALLBACK_ASSESSMENT
    assert assessment.model_dump(by_alias=True)["healthScore"] == 75
    assert len(assessment.findings) == 3
    assert len(assessment.recommendations) == 3


def test_upstream_failure_falls_back():
    text = json.dumps(
        {"healthScore": 10, "findings": [], "recommendations": []}
    )
    assert parse_assessment(text, upstream_status=503) == FALLBACK_ASSESSMENT


def test_fallback_is_not_shared():
    first = parse_assessment("nope")
    first.findings.append("mutated")
    assert len(parse_assessment("nope").findings) == 3


def test_valid_chat():
    request = validate_chat_payload(
        {"messages": [_message("system", "be brief"), _message()]}, SETTINGS
    )
    assert [m.role for m in request.messages] == [
        ChatRole.system,
        ChatRole.user,
    ]


@pytest.mark.parametrize(
    "payload, message",
    [
        (None, "Invalid messages format"),
        ({}, "Invalid messages format"),
        ({"messages": []}, "Invalid messages format"),
        ({"messages": "hi"}, "Invalid messages format"),
        ({"messages": [{"role": "user"}]}, "Invalid messages format"),
        ({"messages": [_message("robot")]}, "Invalid message role"),
        (
            {"messages": [_message()] * 51},
            "Too many messages. Maximum 50 allowed",
        ),
        (
            {"messages": [_message(content="x" * 10241)]},
            "Message too long. Maximum 10KB per message",
        ),
    ],
)
def test_invalid_chat(payload, message):
    with pytest.raises(PayloadValidationError) as exc:
        validate_chat_payload(payload, SETTINGS)
    assert exc.value.message == message


def test_chat_size_counts_utf8_bytes():
    # 3 bytes per character
    content = "€" * 3414
    with pytest.raises(PayloadValidationError):
        validate_chat_payload({"messages": [_message(content=content)]})
    validate_chat_payload({"messages": [_message(content="x" * 10240)]})


def test_upstream_errors():
    ensure_upstream_ok(200)
    with pytest.raises(UpstreamError) as exc:
        ensure_upstream_ok(429, "rate limited")
    assert exc.value.status_code == 502
    assert exc.value.upstream_status == 429
