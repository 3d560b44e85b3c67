import pytest

from quizgen.schemas import TopicRequest, ValidationFailure
from quizgen.services.request_validator import validate_topic_request


def test_valid_topic_is_trimmed():
    result = validate_topic_request({"topic": "  binary search trees \n"})

    assert isinstance(result, TopicRequest)
    assert result.topic == "binary search trees"


def test_extra_keys_are_ignored():
    result = validate_topic_request({"topic": "graphs", "count": 3})

    assert isinstance(result, TopicRequest)
    assert result.topic == "graphs"


def test_missing_topic_reports_topic_field():
    result = validate_topic_request({})

    assert isinstance(result, ValidationFailure)
    assert [issue.field for issue in result.issues] == ["topic"]


@pytest.mark.parametrize("topic", ["", " ", "\t\n  "])
def test_blank_topic_is_rejected(topic):
    result = validate_topic_request({"topic": topic})

    assert isinstance(result, ValidationFailure)
    assert result.issues[0].field == "topic"


@pytest.mark.parametrize("topic", [42, None, ["trees"], {"name": "trees"}, True])
def test_non_string_topic_is_rejected(topic):
    result = validate_topic_request({"topic": topic})

    assert isinstance(result, ValidationFailure)
    assert result.issues[0].field == "topic"


@pytest.mark.parametrize("payload", [None, "binary search trees", ["topic"], 7])
def test_non_object_payload_is_rejected_on_body(payload):
    result = validate_topic_request(payload)

    assert isinstance(result, ValidationFailure)
    assert result.issues[0].field == "body"
    assert result.issues[0].reason
