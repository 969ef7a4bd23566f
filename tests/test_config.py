import errno

import pytest

from canonpath import ExistenceMode, MemoryFilesystem, Resolver, abspath, abspath_or_none
from canonpath.exceptions import (
    CanonPathException,
    ComponentNotFoundError,
    InvalidConfigurationException,
    ResolutionError,
    resolution_error,
)
from canonpath.resolver import DEFAULT_LOOP_BUDGET, DEFAULT_MAX_LINK_SIZE


def test_existence_mode_coerce(monkeypatch):
    monkeypatch.delenv("CANONPATH_EXISTENCE_MODE", raising=False)

    assert ExistenceMode.coerce(True) is ExistenceMode.exact
    assert ExistenceMode.coerce(False) is ExistenceMode.missing_ok
    assert ExistenceMode.coerce("exact") is ExistenceMode.exact
    assert ExistenceMode.coerce(ExistenceMode.missing_ok) is ExistenceMode.missing_ok
    assert ExistenceMode.coerce(None) is ExistenceMode.missing_ok

    with pytest.raises(ValueError):
        ExistenceMode.coerce("sometimes")


def test_existence_mode_from_environment(monkeypatch):
    monkeypatch.delenv("CANONPATH_EXISTENCE_MODE", raising=False)
    assert ExistenceMode.from_environment() is None

    monkeypatch.setenv("CANONPATH_EXISTENCE_MODE", "EXACT")
    assert ExistenceMode.from_environment() is ExistenceMode.exact
    assert ExistenceMode.coerce(None) is ExistenceMode.exact

    # explicit arguments win over the environment
    assert ExistenceMode.coerce(False) is ExistenceMode.missing_ok

    monkeypatch.setenv("CANONPATH_EXISTENCE_MODE", "bogus")
    with pytest.raises(InvalidConfigurationException):
        ExistenceMode.from_environment()


def test_exact_from_environment(monkeypatch):
    fs = MemoryFilesystem()
    resolver = Resolver(filesystem=fs)

    monkeypatch.setenv("CANONPATH_EXISTENCE_MODE", "exact")
    with pytest.raises(ComponentNotFoundError):
        resolver.resolve("/missing", exact=None)

    monkeypatch.setenv("CANONPATH_EXISTENCE_MODE", "missing_ok")
    assert resolver.resolve("/missing", exact=None) == "/missing"


def test_resolver_defaults(monkeypatch):
    monkeypatch.delenv("CANONPATH_LOOP_BUDGET", raising=False)
    monkeypatch.delenv("CANONPATH_MAX_LINK_SIZE", raising=False)

    resolver = Resolver()
    assert resolver.loop_budget == DEFAULT_LOOP_BUDGET == 9999
    assert resolver.max_link_size == DEFAULT_MAX_LINK_SIZE == 4096
    assert "loop_budget=9999" in repr(resolver)


def test_resolver_from_environment(monkeypatch):
    monkeypatch.setenv("CANONPATH_LOOP_BUDGET", "12")
    monkeypatch.setenv("CANONPATH_MAX_LINK_SIZE", "256")

    resolver = Resolver()
    assert resolver.loop_budget == 12
    assert resolver.max_link_size == 256

    # explicit arguments win over the environment
    assert Resolver(loop_budget=5).loop_budget == 5


@pytest.mark.parametrize(
    "env_var,value",
    [
        ("CANONPATH_LOOP_BUDGET", "many"),
        ("CANONPATH_LOOP_BUDGET", "0"),
        ("CANONPATH_MAX_LINK_SIZE", "1"),
    ],
)
def test_invalid_environment(monkeypatch, env_var, value):
    monkeypatch.setenv(env_var, value)

    with pytest.raises(InvalidConfigurationException):
        Resolver()


def test_invalid_arguments():
    with pytest.raises(InvalidConfigurationException):
        Resolver(loop_budget=0)

    with pytest.raises(ValueError):
        Resolver(max_link_size=1)


def test_default_resolver(default_resolver):
    Resolver._default_resolver = None
    assert Resolver.get_default_resolver() is Resolver.get_default_resolver()

    fs = MemoryFilesystem(cwd="/home")
    fs.mkdir("/home/user", parents=True)
    fs.symlink("/home/user", "/me")
    Resolver(filesystem=fs).set_as_default_resolver()

    assert abspath("/me/notes.txt") == "/home/user/notes.txt"
    assert abspath("user", exact=True) == "/home/user"
    assert abspath_or_none("/me/nested/notes.txt") is None
    assert abspath_or_none(b"/me") == b"/home/user"


def test_resolution_errors():
    e = resolution_error(errno.ENOENT, "/a/b")

    assert isinstance(e, ComponentNotFoundError)
    assert isinstance(e, FileNotFoundError)
    assert isinstance(e, CanonPathException)
    assert e.errno == errno.ENOENT
    assert e.filename == "/a/b"
    assert "/a/b" in str(e)

    e = resolution_error(errno.EIO, "/a")
    assert type(e) is ResolutionError
    assert e.strerror
