import pickle
from contextlib import contextmanager

import pytest

from httperr import errors
from httperr.errors import (
    BAD_GATEWAY,
    DEFAULT_ERRORS,
    DEFAULT_INTERNAL_ERROR,
    NOT_FOUND,
    PROXY_ERROR,
    HasHighLevelForm,
    HighLevelError,
    extract_error,
    find_high_level,
    iter_error_chain,
    new_high_level_error,
)


class RepositoryMiss(Exception):
    def as_high_level(self) -> HighLevelError:
        return NOT_FOUND


class BrokenForm(Exception):
    def as_high_level(self):
        raise RuntimeError("boom")


def _raise_wrapped(inner: BaseException, outer: BaseException) -> BaseException:
    try:
        try:
            raise inner
        except BaseException as exc:
            raise outer from exc
    except BaseException as exc:
        return exc


def test_new_high_level_error_is_a_value():
    error = new_high_level_error(404, "not found")
    assert error == NOT_FOUND
    assert hash(error) == hash(NOT_FOUND)
    assert error.code == 404
    assert error.message == "not found"
    assert str(error) == "not found"
    assert isinstance(error, Exception)


def test_constructor_does_not_validate_code():
    error = new_high_level_error(999, "odd")
    assert error.code == 999


def test_high_level_error_is_immutable():
    with pytest.raises(AttributeError):
        NOT_FOUND.code = 500  # type: ignore[misc]


def test_default_table():
    expected = {
        "default_internal_error": (500, "internal server error"),
        "bad_request": (400, "missed parameter, incorrect or malformed data"),
        "not_found": (404, "not found"),
        "unauthorized": (401, "unauthorized"),
        "forbidden": (403, "forbidden"),
        "conflict": (409, "conflict"),
        "too_many_requests": (429, "too many requests"),
        "internal_server_error": (500, "internal server error"),
        "not_implemented": (501, "not implemented"),
        "service_unavailable": (503, "service unavailable"),
        "gateway_timeout": (504, "gateway timeout"),
        "bad_gateway": (502, "bad gateway"),
        "proxy_error": (502, "proxy error"),
        "unknown_error": (500, "unknown error"),
    }
    actual = {name: (error.code, error.message) for name, error in DEFAULT_ERRORS.items()}
    assert actual == expected
    assert type(DEFAULT_ERRORS["not_found"].code) is int


def test_bad_gateway_and_proxy_error_stay_distinct():
    assert BAD_GATEWAY.code == PROXY_ERROR.code
    assert BAD_GATEWAY != PROXY_ERROR


def test_default_table_is_read_only():
    with pytest.raises(TypeError):
        DEFAULT_ERRORS["not_found"] = DEFAULT_INTERNAL_ERROR  # type: ignore[index]


@pytest.mark.parametrize("name", sorted(DEFAULT_ERRORS))
def test_named_defaults_classify_to_themselves(name):
    error = DEFAULT_ERRORS[name]
    assert extract_error(error) is error
    wrapped = _raise_wrapped(error, RuntimeError("storage failed"))
    assert extract_error(wrapped) is error


def test_plain_error_falls_back_to_internal_error():
    assert extract_error(ValueError("nope")) is DEFAULT_INTERNAL_ERROR
    assert extract_error(_raise_wrapped(KeyError("a"), ValueError("b"))) is DEFAULT_INTERNAL_ERROR


def test_none_classifies_as_internal_error():
    assert extract_error(None) is DEFAULT_INTERNAL_ERROR
    assert find_high_level(None) is None


def test_outermost_high_level_error_wins():
    outer = new_high_level_error(409, "already exists")
    wrapped = _raise_wrapped(NOT_FOUND, outer)
    assert extract_error(wrapped) is outer


def test_implicit_context_is_walked():
    try:
        try:
            raise NOT_FOUND
        except HighLevelError:
            raise RuntimeError("while handling")
    except RuntimeError as exc:
        error = exc
    assert extract_error(error) == NOT_FOUND


def test_suppressed_context_is_not_walked():
    try:
        try:
            raise NOT_FOUND
        except HighLevelError:
            raise RuntimeError("fresh") from None
    except RuntimeError as exc:
        error = exc
    assert extract_error(error) is DEFAULT_INTERNAL_ERROR


def test_capability_protocol_is_honoured():
    error = RepositoryMiss("row 12 missing")
    assert isinstance(error, HasHighLevelForm)
    assert extract_error(error) is NOT_FOUND
    assert extract_error(_raise_wrapped(error, OSError("io"))) is NOT_FOUND


def test_failing_capability_is_ignored():
    assert extract_error(BrokenForm()) is DEFAULT_INTERNAL_ERROR
    assert extract_error(_raise_wrapped(NOT_FOUND, BrokenForm())) is NOT_FOUND


def test_exception_groups_are_walked_in_order():
    conflict = new_high_level_error(409, "conflict")
    group = ExceptionGroup("batch", [ValueError("a"), conflict, NOT_FOUND])
    assert extract_error(group) is conflict
    nested = ExceptionGroup("outer", [ExceptionGroup("inner", [NOT_FOUND]), conflict])
    assert extract_error(nested) is NOT_FOUND


def test_iter_error_chain_order_and_cycles():
    first = ValueError("first")
    second = KeyError("second")
    first.__cause__ = second
    second.__cause__ = first
    assert list(iter_error_chain(first)) == [first, second]
    assert list(iter_error_chain(None)) == []


def test_extract_error_is_idempotent():
    wrapped = _raise_wrapped(PROXY_ERROR, RuntimeError("upstream"))
    results = {extract_error(wrapped) for _ in range(5)}
    assert results == {PROXY_ERROR}


def test_to_dict_matches_wire_format():
    assert NOT_FOUND.to_dict() == {"status": 404, "error": "not found"}
    assert errors.UNKNOWN_ERROR.to_dict() == {"status": 500, "error": "unknown error"}


def test_high_level_error_accepts_notes():
    error = new_high_level_error(404, "user not found")
    error.add_note("user id 12")
    assert error.__notes__ == ["user id 12"]


def test_high_level_error_passes_through_context_managers():
    @contextmanager
    def session():
        yield

    with pytest.raises(HighLevelError) as info:
        with session():
            raise new_high_level_error(404, "not found")
    assert info.value == NOT_FOUND


def test_high_level_error_pickles_by_value():
    restored = pickle.loads(pickle.dumps(PROXY_ERROR))
    assert restored == PROXY_ERROR
    assert restored.code == 502
    assert str(restored) == "proxy error"


def test_high_level_error_equality_is_by_value_only():
    assert new_high_level_error(404, "not found") != new_high_level_error(404, "gone")
    assert NOT_FOUND != ValueError("not found")
    assert repr(NOT_FOUND) == "HighLevelError(code=404, message='not found')"
