import pytest

from hcc.errors import BackendError, CompileError, HccError


def test_compile_error_keeps_message():
    err = CompileError("unknown type vec")
    assert str(err) == "unknown type vec"
    assert err.message == "unknown type vec"


def test_compile_error_caught_as_base():
    err = CompileError("undefined variable x")
    caught = None
    try:
        raise err
    except HccError as exc:
        caught = exc
    assert caught is err
    assert str(caught) == "undefined variable x"
    assert caught.message == "undefined variable x"


def test_backend_error_caught_as_base():
    err = BackendError("no such backend")
    caught = None
    try:
        raise err
    except HccError as exc:
        caught = exc
    assert caught is err
    assert caught.message == "no such backend"
    assert str(caught) == "no such backend"


def test_compile_error_is_not_backend_error():
    err = CompileError("undefined variable y")
    assert isinstance(err, BackendError) is False
    assert isinstance(err, HccError) is True
    assert err.message == "undefined variable y"
    with pytest.raises(CompileError, match="undefined variable y"):
        try:
            raise err
        except BackendError:
            pytest.fail("CompileError must not match BackendError")


def test_empty_message():
    assert str(HccError()) == ""