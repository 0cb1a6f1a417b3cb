"""Unit tests for LLM response parsing."""

import pytest

from vellum.utils.llm import (
    LLMResponse,
    get_provider,
    parse_array_response,
    parse_dict_response,
    parse_object_response,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "text",
    [
        '["Python", "Kubernetes"]',
        '```json\n["Python", "Kubernetes"]\n```',
        'Here you go: ["Python", "Kubernetes"] hope it helps',
    ],
)
def test_parse_array_response(text):
    """Test JSON arrays, fenced arrays and arrays embedded in prose."""
    assert parse_array_response(text) == ["Python", "Kubernetes"]


@pytest.mark.unit
def test_parse_array_response_fallback():
    """Test the line and comma split fallback."""
    text = "- Python\n- Kubernetes, Terraform\n* SQL"

    assert parse_array_response(text, fallback_count=3) == ["Python", "Kubernetes", "Terraform"]


@pytest.mark.unit
def test_parse_object_response():
    """Test object extraction from fenced and embedded JSON."""
    assert parse_object_response('```json\n{"a": 1}\n```') == {"a": 1}
    assert parse_object_response('Result: {"a": [1, 2]} done') == {"a": [1, 2]}
    assert parse_object_response("no json here") == {}
    assert parse_object_response("[1, 2]") == {}


@pytest.mark.unit
def test_parse_dict_response():
    """Test that values are coerced to lists of strings."""
    parsed = parse_dict_response('{"responsibilities": ["Led", 3], "note": "scalar"}')

    assert parsed == {"responsibilities": ["Led", "3"], "note": []}


@pytest.mark.unit
def test_parse_dict_response_fallback():
    """Test the fallback for unparseable responses."""
    assert parse_dict_response("garbage") == {}
    assert parse_dict_response("garbage", fallback_dict={"a": []}) == {"a": []}


@pytest.mark.unit
def test_get_provider_rejects_unknown_name():
    """Test provider factory validation."""
    with pytest.raises(ValueError, match="Unknown provider"):
        get_provider(provider_name="nonexistent")


@pytest.mark.unit
def test_llm_response_total_tokens():
    """Test token accounting on provider responses."""
    response = LLMResponse(content="ok", model="test", input_tokens=120, output_tokens=30)

    assert response.total_tokens == 150
