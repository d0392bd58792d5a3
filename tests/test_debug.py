import pytest

from sectorfs.debug import Debug, DebugFlag


def test_none_enables_nothing():
    debug = Debug(None)
    assert not debug.is_enabled(DebugFlag.FILE)
    assert not debug.is_enabled("+")


def test_listed_flag_enabled():
    debug = Debug("fd")
    assert debug.is_enabled(DebugFlag.FILE)
    assert debug.is_enabled("d")
    assert not debug.is_enabled(DebugFlag.THREAD)


def test_plus_enables_all():
    debug = Debug("+")
    assert all(debug.is_enabled(flag) for flag in DebugFlag)


def test_empty_string_enables_nothing():
    debug = Debug("")
    assert not any(debug.is_enabled(flag) for flag in DebugFlag)


@pytest.mark.parametrize(
    "flag, char",
    [(DebugFlag.FILE, "f"), (DebugFlag.DISK, "d"), (DebugFlag.ALL, "+")],
)
def test_flag_characters(flag, char):
    assert Debug(char).is_enabled(flag)


def test_log_enabled_writes_stderr(capsys):
    Debug("f").log(DebugFlag.FILE, "Initializing the file system.")
    captured = capsys.readouterr()
    assert captured.err == "Initializing the file system.\n"
    assert captured.out == ""


def test_log_disabled_is_silent(capsys):
    Debug("t").log(DebugFlag.FILE, "hidden")
    assert capsys.readouterr().err == ""