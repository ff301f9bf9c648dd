from imgtoy.applog import AppLog, LogEntry, RunLog


def test_log_entry_tabs_follow_nesting():
    entry = LogEntry()
    assert entry.tabs("x") == "\tx"
    entry.tab_in().tab_in()
    assert entry.nesting_level == 3
    assert entry.tabs("x") == "\t\t\tx"


def test_apply_effect_message():
    run = RunLog(3)
    run.apply_effect("brighten", [("factor", 0.5), ("mode", "soft")])
    message = str(run.entries[0])
    lines = message.split("\n")
    assert lines[0] == "Applying effect [brighten], with the following parameters..."
    assert lines[1].startswith("\t\t[")
    assert lines[1].endswith("brighten.factor]: 0.5")
    assert len(lines[1]) == len("\t\t[") + 30 + len("]: 0.5")
    assert lines[2].endswith("brighten.mode]: soft")
    assert message.endswith("\n")


def test_run_log_display_pads_iteration():
    run = RunLog(3)
    run.apply_effect("a", []).apply_effect("b", [])
    text = str(run)
    assert text.startswith("[00003]\n")
    assert text.count("Applying effect") == 2


def test_app_log_display():
    log = AppLog("in.png", "out", 4, "file")
    log.add_run(RunLog(0)).add_run(RunLog(1))
    text = str(log)
    lines = text.split("\n")
    assert lines[0] == "[ === APP INFO === ]"
    assert lines[1].endswith("]: file: in.png")
    assert "(unspecified)" in lines[4]
    assert "[ ===== RUNS ===== ]" in text
    assert text.endswith("[00000]\n\n\n[00001]\n")


def test_app_log_max_dim_shown():
    text = str(AppLog("in.png", "out", 1, "url", max_dim=256))
    assert "]: 256" in text
    assert "(unspecified)" not in text