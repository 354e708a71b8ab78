#!/usr/bin/env python3
"""
SHELLCONF STORE SUITE
---------------------
Exercises the ShellConf store: merging parses, ordering, validation on
set(), and atomic persistence with backups.

Author: ShellConf Team
Date: 2026-10-18
"""

import logging

import pytest

from shellconf import (
    IllegalNameError,
    IllegalValueError,
    ShellConf,
    UndecodableTextError,
    UnescapedSpecialCharError,
    load_files,
)

SAMPLE = """\
# Application settings
export APP_NAME="demo app"
APP_PORT=8080 ; # default port

declare APP_HOME='/opt/demo'
"""


def test_parse_collects_in_order():
    conf = ShellConf().parse(SAMPLE)
    assert conf.to_dict() == {
        "APP_NAME": "demo app",
        "APP_PORT": "8080",
        "APP_HOME": "/opt/demo",
    }
    assert list(conf) == ["APP_NAME", "APP_PORT", "APP_HOME"]


def test_parse_accepts_iterable_of_lines():
    conf = ShellConf().parse(["FOO=1", "", "BAR=2"])
    assert conf.to_dict() == {"FOO": "1", "BAR": "2"}


@pytest.mark.parametrize("bad", [42, None, b"FOO=bar"])
def test_parse_rejects_other_types(bad):
    with pytest.raises(TypeError):
        ShellConf().parse(bad)


def test_parse_merges_with_existing_data():
    conf = ShellConf().parse("A=1\nB=2").parse("B=3\nC=4")
    assert conf.to_dict() == {"A": "1", "B": "3", "C": "4"}
    assert list(conf) == ["A", "B", "C"]


def test_strict_parse_is_all_or_nothing():
    conf = ShellConf().parse("A=1")
    with pytest.raises(UnescapedSpecialCharError) as excinfo:
        conf.parse("B=2\nC=bad$value\nD=4")
    assert excinfo.value.line_no == 2
    assert conf.to_dict() == {"A": "1"}


def test_best_effort_parse_skips_and_records(caplog):
    conf = ShellConf()
    with caplog.at_level(logging.WARNING, logger="shellconf.engine"):
        conf.parse("B=2\nC=bad$value\nD=4\n1X=5", skip_errors=True)
    assert conf.to_dict() == {"B": "2", "D": "4"}
    assert [r.line_no for r in conf.errors] == [2, 4]
    assert isinstance(conf.errors[1].error, IllegalNameError)
    assert "<string>:2" in caplog.text


def test_set_get_unset():
    conf = ShellConf()
    conf.set("FOO", "bar").set("BAZ", "qux")
    assert conf.get("FOO") == "bar"
    assert conf.get("MISSING") is None
    assert conf.get("MISSING", False) is False
    assert "BAZ" in conf
    assert len(conf) == 2

    conf.unset("FOO").unset("NEVER_SET")
    assert "FOO" not in conf
    assert conf.get("FOO", "") == ""


@pytest.mark.parametrize("name", ["_", "1FOO", "FOO BAR", ""])
def test_set_rejects_illegal_names(name):
    with pytest.raises(IllegalNameError):
        ShellConf().set(name, "value")


@pytest.mark.parametrize("value", ["a\nb", "a\rb", "a\0b"])
def test_set_never_truncates_illegal_values(value):
    conf = ShellConf()
    with pytest.raises(IllegalValueError):
        conf.set("FOO", value)
    assert "FOO" not in conf


def test_constructor_validates_initial_data():
    assert ShellConf({"A": "1"}).to_dict() == {"A": "1"}
    with pytest.raises(IllegalValueError):
        ShellConf({"A": "line\nbreak"})


def test_reset():
    conf = ShellConf().parse("A=1").reset()
    assert conf.to_dict() == {}


def test_sort_by_name_and_value():
    conf = ShellConf().parse("B=1\nC=3\nA=2")
    assert list(conf.sort_by_name()) == ["A", "B", "C"]
    assert list(conf.sort_by_name(reverse=True)) == ["C", "B", "A"]
    assert list(conf.sort_by_value()) == ["B", "A", "C"]
    assert list(conf.sort_by_value(key=lambda v: -int(v))) == ["C", "A", "B"]
    assert list(conf.sort_by_name(key=str.lower)) == ["A", "B", "C"]


def test_to_string_uses_prefix():
    conf = ShellConf({"FOO": 'a"b', "BAR": "$x"})
    assert conf.to_string() == 'FOO="a\\"b"\nBAR="\\$x"'
    assert conf.to_string("export") == 'export FOO="a\\"b"\nexport BAR="\\$x"'
    assert ShellConf({"A": "1"}, prefix="export").to_string() == 'export A="1"'
    assert ShellConf().to_string() == ""


def test_get_line():
    assert ShellConf.get_line("FOO", "bar", "export") == 'export FOO="bar"'
    assert ShellConf.get_line("FOO") == 'FOO=""'


def test_to_string_round_trips():
    conf = ShellConf().parse(SAMPLE)
    again = ShellConf().parse(conf.to_string("export"))
    assert again.to_dict() == conf.to_dict()


def test_load_strips_bom_and_crlf(tmp_path):
    path = tmp_path / "app.conf"
    path.write_bytes("\ufeffFOO=bar\r\n# comment\r\nBAZ='q x'\r\n".encode("utf-8"))
    conf = ShellConf().load(path)
    assert conf.to_dict() == {"FOO": "bar", "BAZ": "q x"}


def test_load_rejects_invalid_utf8(tmp_path):
    path = tmp_path / "app.conf"
    path.write_bytes(b"A=1\nB=\xff\n")
    with pytest.raises(UndecodableTextError) as excinfo:
        ShellConf().load(path)
    assert str(path) in str(excinfo.value)


def test_load_missing_or_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        ShellConf().load(tmp_path / "missing.conf")
    with pytest.raises(FileNotFoundError):
        ShellConf().load(tmp_path)


def test_load_files_later_wins(tmp_path):
    first = tmp_path / "a.conf"
    second = tmp_path / "b.conf"
    first.write_text("A=1\nB=1\n")
    second.write_text("B=2\nC=bad$\n")
    conf = load_files([first, second], skip_errors=True)
    assert conf.to_dict() == {"A": "1", "B": "2"}
    assert len(conf.errors) == 1


def test_save_writes_atomically_with_backup(tmp_path):
    path = tmp_path / "app.conf"
    path.write_text("OLD=1\n")

    conf = ShellConf({"NEW": "a b"})
    backup = conf.save(path, prefix="export")

    assert path.read_text() == 'export NEW="a b"\n'
    assert backup is not None and backup.read_text() == "OLD=1\n"
    assert backup.name == "app.conf.shellconf.backup"
    assert not list(tmp_path.glob("*.shellconf.tmp"))

    second = conf.save(path)
    assert second.name == "app.conf-1.shellconf.backup"
    assert path.read_text() == 'NEW="a b"\n'


def test_save_without_backup(tmp_path):
    path = tmp_path / "app.conf"
    path.write_text("OLD=1\n")
    assert ShellConf({"A": "1"}).save(path, backup=False) is None
    assert list(tmp_path.iterdir()) == [path]


def test_save_then_load(tmp_path):
    path = tmp_path / "new.conf"
    original = ShellConf().parse(SAMPLE)
    assert original.save(path) is None
    assert ShellConf().load(path).to_dict() == original.to_dict()


def test_structured_exports():
    conf = ShellConf({"B": "2", "A": "yes"})
    assert conf.to_json() == '{\n  "B": "2",\n  "A": "yes"\n}'
    assert conf.to_yaml().splitlines()[0].startswith("B:")
