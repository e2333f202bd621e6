from __future__ import annotations

import logging

import pytest

from stratum_notify import NOTIFY_PARAMS, InvalidNotify, NotifyFailure, NotifyParams
from stratum_notify.primitives import (DEFAULT_CODECS, Bytes, Codecs,
                                       Difficulty, Digest32, Int32Little,
                                       UInt32Little)

from .conftest import PREV_HASH_HEX


def test_minimal_params_decode(params):
    assert NOTIFY_PARAMS.valid(params)
    assert NOTIFY_PARAMS.job_id(params) == "job-7"
    assert NOTIFY_PARAMS.clean(params) is True
    assert NOTIFY_PARAMS.merkle_branch(params) == []
    assert NOTIFY_PARAMS.generation_tx1(params) == Bytes(b"")
    assert NOTIFY_PARAMS.generation_tx2(params) == Bytes(b"")
    assert NOTIFY_PARAMS.version(params) == Int32Little(2)
    assert NOTIFY_PARAMS.nbits(params) == Difficulty(0x1D00FFFF)
    assert NOTIFY_PARAMS.time(params) == UInt32Little(1_600_000_000)


def test_prev_hash_is_byte_reversed(params):
    digest = NOTIFY_PARAMS.prev_hash(params)
    assert isinstance(digest, Digest32)
    assert digest.buffer == bytes.fromhex(PREV_HASH_HEX)[::-1]


def test_full_params_decode(full_params):
    assert NOTIFY_PARAMS.valid(full_params)
    branch = NOTIFY_PARAMS.merkle_branch(full_params)
    assert [d.buffer for d in branch] == [b"\x11" * 32, b"\xab" * 32]
    assert NOTIFY_PARAMS.generation_tx1(full_params).buffer == bytes.fromhex(
        "01000000010000"
    )
    assert NOTIFY_PARAMS.version(full_params).value == 0x20000000
    assert NOTIFY_PARAMS.nbits(full_params).bits == 0x1B0404CB
    assert NOTIFY_PARAMS.clean(full_params) is False


def test_truncated_prev_hash_rejected(params):
    params[1] = params[1][:63]
    assert not NOTIFY_PARAMS.valid(params)
    with pytest.raises(InvalidNotify) as exc:
        NOTIFY_PARAMS.prev_hash(params)
    assert exc.value.reason == NotifyFailure.PREV_HASH


def test_every_decoder_revalidates(params):
    params[8] = "true"
    decoders = [
        NOTIFY_PARAMS.job_id,
        NOTIFY_PARAMS.prev_hash,
        NOTIFY_PARAMS.generation_tx1,
        NOTIFY_PARAMS.generation_tx2,
        NOTIFY_PARAMS.merkle_branch,
        NOTIFY_PARAMS.version,
        NOTIFY_PARAMS.nbits,
        NOTIFY_PARAMS.time,
        NOTIFY_PARAMS.clean,
        NOTIFY_PARAMS.decode,
    ]
    for decode in decoders:
        with pytest.raises(InvalidNotify):
            decode(params)


@pytest.mark.parametrize("length", [0, 8, 10])
def test_wrong_length_rejected(params, length):
    p = (params + [None])[:length] if length <= 9 else params + [None]
    assert NOTIFY_PARAMS.check(p) == NotifyFailure.WRONG_LENGTH


def test_not_a_list():
    assert NOTIFY_PARAMS.check({"0": "job"}) == NotifyFailure.NOT_A_LIST
    assert NOTIFY_PARAMS.check(None) == NotifyFailure.NOT_A_LIST


@pytest.mark.parametrize(
    "index, value, reason",
    [
        (0, 7, NotifyFailure.JOB_ID),
        (1, "0" * 65, NotifyFailure.PREV_HASH),
        (1, "g" * 64, NotifyFailure.PREV_HASH),
        (2, "abc", NotifyFailure.GENERATION_TX1),
        (3, "zz", NotifyFailure.GENERATION_TX2),
        (4, "11" * 32, NotifyFailure.MERKLE_BRANCH),
        (4, ["11" * 31], NotifyFailure.MERKLE_DIGEST),
        (4, ["1" * 63], NotifyFailure.MERKLE_DIGEST),
        (4, ["1" * 65], NotifyFailure.MERKLE_DIGEST),
        (5, "0000002", NotifyFailure.VERSION),
        (6, 0x1D00FFFF, NotifyFailure.NBITS),
        (7, "5f5e10000", NotifyFailure.TIME),
        (8, 1, NotifyFailure.CLEAN),
    ],
)
def test_field_failures(params, index, value, reason):
    params[index] = value
    assert NOTIFY_PARAMS.check(params) == reason
    assert not NOTIFY_PARAMS.valid(params)


def test_mixed_case_hex_rejected(params):
    params[1] = "aB" + "00" * 31
    assert len(params[1]) == 64
    assert NOTIFY_PARAMS.check(params) == NotifyFailure.PREV_HASH

    params[1] = "AB" * 32
    assert NOTIFY_PARAMS.valid(params)

    params[2] = "aBcd"
    assert NOTIFY_PARAMS.check(params) == NotifyFailure.GENERATION_TX1


def test_mixed_case_branch_digest_rejected(params, caplog):
    params[4] = ["11" * 32, "Ab" * 32]
    with caplog.at_level(logging.DEBUG, logger="stratum_notify.notify"):
        assert NOTIFY_PARAMS.check(params) == NotifyFailure.MERKLE_DIGEST
    assert caplog.text == ""

    with caplog.at_level(logging.DEBUG, logger="stratum_notify.notify"):
        assert not NOTIFY_PARAMS.valid(params)
    assert caplog.text.count("invalid notify params") == 1
    assert "merkle_digest" in caplog.text


def test_checks_short_circuit_in_order(params):
    params[1] = "x"
    params[8] = None
    assert NOTIFY_PARAMS.check(params) == NotifyFailure.PREV_HASH


def test_substituted_codecs_are_used(params):
    class MarkedDigest(Digest32):
        pass

    codec = NotifyParams(
        Codecs(
            digest=MarkedDigest,
            bytes=DEFAULT_CODECS.bytes,
            int32=DEFAULT_CODECS.int32,
            uint32=DEFAULT_CODECS.uint32,
            difficulty=DEFAULT_CODECS.difficulty,
        )
    )
    params[4] = ["22" * 32]
    assert isinstance(codec.prev_hash(params), MarkedDigest)
    assert all(isinstance(d, MarkedDigest) for d in codec.merkle_branch(params))


def test_tuples_are_not_json_arrays(params):
    assert NOTIFY_PARAMS.check(tuple(params)) == NotifyFailure.NOT_A_LIST
    params[4] = ("11" * 32,)
    assert NOTIFY_PARAMS.check(params) == NotifyFailure.MERKLE_BRANCH
