"""
Pytest configuration and shared fixtures for jsonvfy tests.

Provides immutable test data fixtures built from the json.org
JSON_checker suite, each annotated with the error kind the validator
must report.
"""

from dataclasses import dataclass

import pytest

from jsonvfy import ErrorKind


@dataclass(frozen=True)
class JsonTestCase:
    """
    Immutable container for JSON test case data.

    Holds the raw document bytes and the expected verdict.
    """

    description: str
    input_data: bytes
    expected_kind: ErrorKind | None = None
    skip_reason: str = ""

    @property
    def should_fail(self) -> bool:
        return self.expected_kind is not None


_FAIL_DOCS = [
    # https://json.org/JSON_checker/test/fail1.json
    ('"A JSON payload should be an object or array, not a string."', None),
    # https://json.org/JSON_checker/test/fail2.json
    ('["Unclosed array"', ErrorKind.UNEXPECTED_END_OF_INPUT),
    # https://json.org/JSON_checker/test/fail3.json
    ('{unquoted_key: "keys must be quoted"}', ErrorKind.UNEXPECTED_TOKEN),
    # https://json.org/JSON_checker/test/fail4.json
    ('["extra comma",]', ErrorKind.TRAILING_COMMA),
    # https://json.org/JSON_checker/test/fail5.json
    ('["double extra comma",,]', ErrorKind.UNEXPECTED_TOKEN),
    # https://json.org/JSON_checker/test/fail6.json
    ('[   , "<-- missing value"]', ErrorKind.UNEXPECTED_TOKEN),
    # https://json.org/JSON_checker/test/fail7.json
    ('["Comma after the close"],', ErrorKind.TRAILING_CONTENT),
    # https://json.org/JSON_checker/test/fail8.json
    ('["Extra close"]]', ErrorKind.UNEXPECTED_TOKEN),
    # https://json.org/JSON_checker/test/fail9.json
    ('{"Extra comma": true,}', ErrorKind.TRAILING_COMMA),
    # https://json.org/JSON_checker/test/fail10.json
    (
        '{"Extra value after close": true} "misplaced quoted value"',
        ErrorKind.TRAILING_CONTENT,
    ),
    # https://json.org/JSON_checker/test/fail11.json
    ('{"Illegal expression": 1 + 2}', ErrorKind.INVALID_NUMBER_FORMAT),
    # https://json.org/JSON_checker/test/fail12.json
    ('{"Illegal invocation": alert()}', ErrorKind.UNEXPECTED_TOKEN),
    # https://json.org/JSON_checker/test/fail13.json
    (
        '{"Numbers cannot have leading zeroes": 013}',
        ErrorKind.INVALID_NUMBER_FORMAT,
    ),
    # https://json.org/JSON_checker/test/fail14.json
    ('{"Numbers cannot be hex": 0x14}', ErrorKind.INVALID_NUMBER_FORMAT),
    # https://json.org/JSON_checker/test/fail15.json
    ('["Illegal backslash escape: \\x15"]', ErrorKind.INVALID_ESCAPE),
    # https://json.org/JSON_checker/test/fail16.json
    ("[\\naked]", ErrorKind.UNEXPECTED_TOKEN),
    # https://json.org/JSON_checker/test/fail17.json
    ('["Illegal backslash escape: \\017"]', ErrorKind.INVALID_ESCAPE),
    # https://json.org/JSON_checker/test/fail18.json
    ('[[[[[[[[[[[[[[[[[[[["Too deep"]]]]]]]]]]]]]]]]]]]]', None),
    # https://json.org/JSON_checker/test/fail19.json
    ('{"Missing colon" null}', ErrorKind.UNEXPECTED_TOKEN),
    # https://json.org/JSON_checker/test/fail20.json
    ('{"Double colon":: null}', ErrorKind.UNEXPECTED_TOKEN),
    # https://json.org/JSON_checker/test/fail21.json
    ('{"Comma instead of colon", null}', ErrorKind.UNEXPECTED_TOKEN),
    # https://json.org/JSON_checker/test/fail22.json
    ('["Colon instead of comma": false]', ErrorKind.UNEXPECTED_TOKEN),
    # https://json.org/JSON_checker/test/fail23.json
    ('["Bad value", truth]', ErrorKind.UNEXPECTED_TOKEN),
    # https://json.org/JSON_checker/test/fail24.json
    ("['single quote']", ErrorKind.UNEXPECTED_TOKEN),
    # https://json.org/JSON_checker/test/fail25.json
    (
        '["\ttab\tcharacter\tin\tstring\t"]',
        ErrorKind.INVALID_CONTROL_CHARACTER,
    ),
    # https://json.org/JSON_checker/test/fail26.json
    ('["tab\\   character\\   in\\  string\\  "]', ErrorKind.INVALID_ESCAPE),
    # https://json.org/JSON_checker/test/fail27.json
    ('["line\nbreak"]', ErrorKind.INVALID_CONTROL_CHARACTER),
    # https://json.org/JSON_checker/test/fail28.json
    ('["line\\\nbreak"]', ErrorKind.INVALID_ESCAPE),
    # https://json.org/JSON_checker/test/fail29.json
    ("[0e]", ErrorKind.INVALID_NUMBER_FORMAT),
    # https://json.org/JSON_checker/test/fail30.json
    ("[0e+]", ErrorKind.INVALID_NUMBER_FORMAT),
    # https://json.org/JSON_checker/test/fail31.json
    ("[0e+-1]", ErrorKind.INVALID_NUMBER_FORMAT),
    # https://json.org/JSON_checker/test/fail32.json
    (
        '{"Comma instead if closing brace": true,',
        ErrorKind.UNEXPECTED_END_OF_INPUT,
    ),
    # https://json.org/JSON_checker/test/fail33.json
    ('["mismatch"}', ErrorKind.UNEXPECTED_TOKEN),
    # https://code.google.com/archive/p/simplejson/issues/3
    (
        '["A\u001fZ control characters in string"]',
        ErrorKind.INVALID_CONTROL_CHARACTER,
    ),
]

# Cases that RFC 8259 (or the default configuration) accepts
_SKIPS = {
    1: "RFC 8259 allows any value at the top level",
    18: "20 levels is within the default nesting limit of 128",
}

PASS1 = """[
    "JSON Test Pattern pass1",
    {"object with 1 member":["array with 1 element"]},
    {},
    [],
    -42,
    true,
    false,
    null,
    {
        "integer": 1234567890,
        "real": -9876.543210,
        "e": 0.123456789e-12,
        "E": 1.234567890E+34,
        "":  23456789012E66,
        "zero": 0,
        "one": 1,
        "space": " ",
        "quote": "\\"",
        "backslash": "\\\\",
        "controls": "\\b\\f\\n\\r\\t",
        "slash": "/ & \\/",
        "alpha": "abcdefghijklmnopqrstuvwyz",
        "ALPHA": "ABCDEFGHIJKLMNOPQRSTUVWYZ",
        "digit": "0123456789",
        "0123456789": "digit",
        "special": "`1~!@#$%^&*()_+-={':[,]}|;.</>?",
        "hex": "\\u0123\\u4567\\u89AB\\uCDEF\\uabcd\\uef4A",
        "true": true,
        "false": false,
        "null": null,
        "array":[  ],
        "object":{  },
        "address": "50 St. James Street",
        "url": "https://www.JSON.org/",
        "comment": "// /* <!-- --",
        "# -- --> */": " ",
        " s p a c e d " :[1,2 , 3

,

4 , 5        ,          6           ,7        ],"compact":[1,2,3,4,5,6,7],
        "jsontext": "{\\"object with 1 member\\":[\\"array with 1 element\\"]}",
        "quotes": "&#34; \\u0022 %22 0x22 034 &#x22;",
        "\\/\\\\\\"\\uCAFE\\uBABE\\uAB98\\uFCDE\\ubcda\\uef4A\\b\\f\\n\\r\\t`1~!@#$%^&*()_+-=[]{}|;:',./<>?"
: "A key can be any string"
    },
    0.5 ,98.6
,
99.44
,

1066,
1e1,
0.1e1,
1e-1,
1e00,2e+00,2e-00
,"rosebud"]"""


@pytest.fixture
def json_fail_cases() -> list[JsonTestCase]:
    """
    Provides documents that must be rejected, with the expected error kind.

    These come from json.org JSON_checker; the two it rejects for policy
    reasons carry a skip reason instead.
    """
    return [
        JsonTestCase(
            description=f"fail{idx + 1}.json",
            input_data=doc.encode("utf-8"),
            expected_kind=kind,
            skip_reason=_SKIPS.get(idx + 1, ""),
        )
        for idx, (doc, kind) in enumerate(_FAIL_DOCS)
    ]


@pytest.fixture
def json_pass_cases() -> list[JsonTestCase]:
    """
    Provides documents that must validate per RFC 8259.
    """
    return [
        JsonTestCase(
            "pass1.json - complex nested structure", PASS1.encode("utf-8")
        ),
        JsonTestCase(
            "pass2.json - deep nesting",
            b'[[[[[[[[[[[[[[[[[[["Not too deep"]]]]]]]]]]]]]]]]]]]',
        ),
        JsonTestCase(
            "pass3.json - simple object",
            b'{"JSON Test Pattern pass3": {"The outermost value": '
            b'"must be an object or array.", "In this test": '
            b'"It is an object."}}',
        ),
    ]


@pytest.fixture
def basic_json_values() -> list[JsonTestCase]:
    """
    Provides every JSON value type as a standalone document.
    """
    return [
        JsonTestCase("null value", b"null"),
        JsonTestCase("true boolean", b"true"),
        JsonTestCase("false boolean", b"false"),
        JsonTestCase("integer", b"42"),
        JsonTestCase("negative integer", b"-17"),
        JsonTestCase("float", b"3.14"),
        JsonTestCase("empty string", b'""'),
        JsonTestCase("simple string", b'"hello"'),
        JsonTestCase("empty array", b"[]"),
        JsonTestCase("empty object", b"{}"),
        JsonTestCase("simple array", b"[1, 2, 3]"),
        JsonTestCase("simple object", b'{"key": "value"}'),
        JsonTestCase("non-ascii string", '"héllo 世界"'.encode()),
    ]
