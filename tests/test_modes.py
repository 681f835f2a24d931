import logging

import pytest

from blake3_session.core.modes import (
    AUTO,
    DeriveKey,
    Keyed,
    Unkeyed,
    check_advisory_params,
    read_buffer,
    select_mode,
    validate_context,
    validate_digest_size,
    validate_key,
)
from blake3_session.errors import (
    ConflictingModeError,
    EmptyContextError,
    InvalidContextError,
    InvalidDigestSizeError,
    InvalidKeyLengthError,
    UnsupportedParameterError,
)


def test_select_mode_unkeyed():
    assert select_mode() == Unkeyed()


def test_select_mode_keyed(key):
    mode = select_mode(key=key)
    assert isinstance(mode, Keyed)
    assert mode.key == key
    assert mode.name == "keyed"


def test_keyed_repr_hides_key(key):
    assert key.hex() not in repr(Keyed(key))
    assert repr(key) not in repr(Keyed(key))


def test_select_mode_derive_key():
    mode = select_mode(context="ctx")
    assert mode == DeriveKey(b"ctx")
    assert mode.context_text == "ctx"


def test_select_mode_conflict(key):
    with pytest.raises(ConflictingModeError) as exc:
        select_mode(key, "ctx")
    assert exc.value.code == "CONFLICTING_MODE"


def test_validate_key_accepts_memoryview(key):
    assert validate_key(memoryview(key)) == key


def test_validate_key_wrong_length():
    with pytest.raises(InvalidKeyLengthError, match="got 0"):
        validate_key(b"")


def test_validate_key_rejects_text():
    with pytest.raises(TypeError):
        validate_key("k" * 32)


@pytest.mark.parametrize("context", [None, "", b"", bytearray()])
def test_validate_context_empty(context):
    with pytest.raises(EmptyContextError):
        validate_context(context)


def test_validate_context_non_utf8():
    with pytest.raises(InvalidContextError) as exc:
        validate_context(b"ok\xff")
    assert exc.value.details == {"position": 2}


def test_validate_context_encodes_text():
    assert validate_context("café") == "café".encode()


@pytest.mark.parametrize("value", [1, 32, 65536])
def test_validate_digest_size_ok(value):
    assert validate_digest_size(value) == value


@pytest.mark.parametrize("value", [0, -5, 65537, 10**9])
def test_validate_digest_size_range(value):
    with pytest.raises(InvalidDigestSizeError) as exc:
        validate_digest_size(value, name="length")
    assert exc.value.details == {"field": "length", "value": value}
    assert "length" in str(exc.value)


@pytest.mark.parametrize("value", [None, "32", 1.5, False])
def test_validate_digest_size_type(value):
    with pytest.raises(TypeError):
        validate_digest_size(value)


def test_read_buffer_rejects_str():
    with pytest.raises(TypeError, match="encoded"):
        read_buffer("abc")


def test_read_buffer_names_argument():
    with pytest.raises(TypeError, match="payload"):
        read_buffer(object(), name="payload")


class TestAdvisoryParams:
    def test_defaults_pass_under_reject(self):
        check_advisory_params(policy="reject")

    def test_ignored_values_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="blake3_session.core.modes"):
            check_advisory_params(usedforsecurity=False, max_threads=AUTO)
        assert "ignoring advisory parameters" in caplog.text

    def test_reject_lists_parameters(self):
        with pytest.raises(UnsupportedParameterError) as exc:
            check_advisory_params(usedforsecurity=False, max_threads=4, policy="reject")
        assert exc.value.details == {"usedforsecurity": False, "max_threads": 4}

    @pytest.mark.parametrize("threads", [0, -2])
    def test_max_threads_range(self, threads):
        with pytest.raises(ValueError):
            check_advisory_params(max_threads=threads)

    def test_max_threads_type(self):
        with pytest.raises(TypeError):
            check_advisory_params(max_threads=True)

    def test_usedforsecurity_type(self):
        with pytest.raises(TypeError):
            check_advisory_params(usedforsecurity=1)
