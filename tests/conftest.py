from __future__ import annotations

import pytest

PREV_HASH_HEX = "0123456789abcdef" * 4


@pytest.fixture
def params():
    return [
        "job-7",
        PREV_HASH_HEX,
        "",
        "",
        [],
        "00000002",
        "1d00ffff",
        "5f5e1000",
        True,
    ]


@pytest.fixture
def full_params():
    return [
        "b3ba",
        "ff" * 32,
        "01000000010000",
        "ffffffff0100f2052a01000000",
        ["11" * 32, "AB" * 32],
        "20000000",
        "1b0404cb",
        "504e86ed",
        False,
    ]


@pytest.fixture
def message(params):
    return {"id": None, "method": "mining.notify", "params": params}
