"""
Document generators for validation benchmarks.

Creates encoded JSON documents for performance testing:
- Different sizes (small object up to multi-megabyte arrays)
- Different shapes (flat, deeply nested, string heavy, non-ASCII)
- Invalid documents whose single error sits at the very end

Generation is seeded so every run measures identical bytes.
"""

import json
import random
import string
from typing import Any

_SEED = 8259
_ESCAPE_PROBABILITY = 0.3
_ESCAPES = ['\\"', "\\\\", "\\/", "\\b", "\\f", "\\n", "\\r", "\\t"]
_NON_ASCII_WORDS = [
    "café",
    "naïve",
    "Größe",
    "日本語",
    "данные",
    "😀🚀",
    "αβγ",
]

DATA_TYPES = (
    "small_object",
    "large_object",
    "mixed_array",
    "deep_nesting",
    "string_heavy",
    "non_ascii",
)


def generate_test_data(data_type: str) -> bytes:
    """Generates a UTF-8 encoded document of the given type."""
    generators = {
        "small_object": _generate_small_object,
        "large_object": _generate_large_object,
        "mixed_array": _generate_mixed_array,
        "deep_nesting": _generate_deep_nesting,
        "string_heavy": _generate_string_heavy,
        "non_ascii": _generate_non_ascii,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    return generators[data_type](random.Random(_SEED)).encode("utf-8")


def generate_invalid_data(data_type: str) -> bytes:
    """
    Generates a document that is valid except for a trailing comma
    before its final closing bracket.

    Validators must read the whole input before rejecting it, so this
    measures the cost of a full scan that ends in an error.
    """
    doc = generate_test_data(data_type)
    closer = doc.rstrip()[-1:]
    if closer not in (b"]", b"}"):
        raise ValueError(f"{data_type} is not a container document")
    return doc.rstrip()[:-1] + b"," + closer


def _generate_small_object(rng: random.Random) -> str:
    """Generates a small object (< 1KB) with basic key-value pairs."""
    data = {
        "id": 12345,
        "name": "Alice Johnson",
        "email": "alice@example.com",
        "active": True,
        "balance": 1234.56,
        "metadata": {"created": "2024-01-15T10:30:00Z", "source": "api"},
    }
    return json.dumps(data)


def _generate_large_object(rng: random.Random) -> str:
    """Generates an object of a few hundred KB with many records."""
    data = {
        "user_id": rng.randint(1000000, 9999999),
        "transactions": [
            {
                "id": f"txn_{i:06d}",
                "amount": round(rng.uniform(1.0, 1000.0), 2),
                "currency": rng.choice(["USD", "EUR", "GBP", "JPY"]),
                "timestamp": _timestamp(rng),
                "description": f"Payment for {_random_string(rng, 20)}",
                "status": rng.choice(["completed", "pending", "failed"]),
                "fee": None if i % 3 else round(rng.uniform(0, 5), 2),
            }
            for i in range(2000)
        ],
        "activity_log": [
            {
                "timestamp": _timestamp(rng),
                "action": rng.choice(["login", "logout", "purchase"]),
                "ip_address": ".".join(
                    str(rng.randint(1, 255)) for _ in range(4)
                ),
                "user_agent": f"Mozilla/5.0 ({_random_string(rng, 20)})",
            }
            for _ in range(1000)
        ],
    }
    return json.dumps(data, indent=2)


def _generate_mixed_array(rng: random.Random) -> str:
    """Generates a large array mixing every value type."""
    array: list[Any] = []

    for i in range(20000):
        choice = rng.randint(1, 6)
        if choice == 1:
            array.append(rng.randint(-(10**12), 10**12))
        elif choice == 2:
            array.append(rng.uniform(-1e6, 1e6))
        elif choice == 3:
            array.append(_random_string(rng, rng.randint(5, 30)))
        elif choice == 4:
            array.append(rng.choice([True, False]))
        elif choice == 5:
            array.append(None)
        else:
            array.append({"index": i, "score": rng.uniform(0, 100)})

    return json.dumps(array)


def _generate_deep_nesting(rng: random.Random) -> str:
    """Generates nesting close to the default depth limit of 128."""
    depth = 120
    inner = json.dumps({"value": _random_string(rng, 10)})
    for level in range(depth - 1):
        if level % 2:
            inner = f'{{"level": {level}, "child": {inner}}}'
        else:
            inner = f"[{level}, {inner}]"
    return json.dumps([json.loads(inner) for _ in range(200)])


def _generate_string_heavy(rng: random.Random) -> str:
    """Generates long strings full of escape sequences."""

    def escaped_string() -> str:
        chars = []
        for _ in range(200):
            if rng.random() < _ESCAPE_PROBABILITY:
                chars.append(rng.choice(_ESCAPES))
            else:
                chars.append(
                    rng.choice(string.ascii_letters + string.digits + " ")
                )
        return "".join(chars)

    # Build the text by hand so the escapes survive as written
    strings = ", ".join(f'"{escaped_string()}"' for _ in range(1000))
    unicode = ", ".join(
        f'"\\u{rng.randint(0x20, 0xD7FF):04x}\\ud83d\\ude00"'
        for _ in range(500)
    )
    return f'{{"strings": [{strings}], "unicode": [{unicode}]}}'


def _generate_non_ascii(rng: random.Random) -> str:
    """Generates raw multi-byte UTF-8 text in keys and values."""
    data = {
        f"{rng.choice(_NON_ASCII_WORDS)}_{i}": " ".join(
            rng.choice(_NON_ASCII_WORDS) for _ in range(20)
        )
        for i in range(3000)
    }
    return json.dumps(data, ensure_ascii=False)


def _timestamp(rng: random.Random) -> str:
    return (
        f"2024-{rng.randint(1, 12):02d}-{rng.randint(1, 28):02d}"
        f"T{rng.randint(0, 23):02d}:{rng.randint(0, 59):02d}:00Z"
    )


def _random_string(rng: random.Random, length: int) -> str:
    """Generates a random ASCII string of the given length."""
    return "".join(rng.choices(string.ascii_letters, k=length))
