import pytest
from structlog.testing import capture_logs

from record_prep.logstorage import JSONType, json_type_of
from record_prep.utils.errors import InvariantViolation


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, JSONType.NULL),
        ({}, JSONType.OBJECT),
        ([], JSONType.ARRAY),
        ("", JSONType.STRING),
        (0, JSONType.NUMBER),
        (1.5, JSONType.NUMBER),
        (True, JSONType.TRUE),
        (False, JSONType.FALSE),
    ],
)
def test_json_type_of_classifies_decoded_values(value, expected):
    assert json_type_of(value) is expected


def test_json_type_of_rejects_values_outside_the_taxonomy():
    with capture_logs() as logs, pytest.raises(InvariantViolation, match="set"):
        json_type_of({1})

    assert logs == [
        {"event": "logstorage.json.unexpected_type", "type": "set", "log_level": "critical"}
    ]


def test_invariant_violation_is_an_assertion_error():
    assert issubclass(InvariantViolation, AssertionError)
