import pytest

from imgtoy.systemlog import SystemLog


def _read(tmp_path, name):
    return (tmp_path / name).read_text(encoding="utf-8").splitlines()


def test_header_is_centred(tmp_path):
    with SystemLog(str(tmp_path)) as log:
        log.header("APP INIT")
    (line,) = _read(tmp_path, "log.log")
    assert line.startswith("[ ") and line.endswith(" ]")
    inner = line[2:-2]
    assert len(inner) == 50
    assert inner.strip("=") == "APP INIT"


def test_state_property_without_category(tmp_path):
    with SystemLog(str(tmp_path)) as log:
        log.state_property("n", 5)
    (line,) = _read(tmp_path, "log.log")
    assert line == "n".rjust(15) + ": 5"


def test_category_indents_and_underscores(tmp_path):
    with SystemLog(str(tmp_path)) as log:
        log.begin_category("source").state_property("file", "a.png").end_category()
        log.message("after")
    lines = _read(tmp_path, "log.log")
    assert lines[0].strip("[ -]") == "source"
    assert lines[1] == "    |" + "file".rjust(15, "_") + ": a.png"
    assert lines[2] == "after"
    assert log.indent_level == 0
    assert log.categories == []


def test_pause_suppresses_messages(tmp_path):
    with SystemLog(str(tmp_path)) as log:
        log.pause().message("hidden").unpause().alert("shown")
    assert _read(tmp_path, "log.log") == ["ALERT: shown"]
    app = _read(tmp_path, "app.log")
    assert any("hidden" in line for line in app)


def test_status_levels_in_app_log(tmp_path):
    with SystemLog(str(tmp_path)) as log:
        log.sys_log("started").warn_log("x", "w").fatal_log("y", "f")
    lines = _read(tmp_path, "app.log")
    assert lines[0].startswith("[ INFO] [")
    assert lines[0].endswith("sys]: started")
    assert lines[1].startswith("[ WARN]")
    assert lines[2].startswith("[FATAL]")


def test_unindent_saturates_at_zero(tmp_path):
    with SystemLog(str(tmp_path)) as log:
        log.unindent().unindent()
        assert log.indent_level == 0
        log.end_category()
    assert _read(tmp_path, "app.log")[-1].endswith("[/]")


def test_missing_directory_raises(tmp_path):
    with pytest.raises(OSError):
        SystemLog(str(tmp_path / "missing"))