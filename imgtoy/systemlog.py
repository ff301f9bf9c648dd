"""A two-file text log: a readable log and a detailed application log."""

from __future__ import annotations

import os
from typing import Any

_MAX_INDENT = 255


class SystemLog:
    """Writes ``log.log`` and ``app.log`` into an output directory."""

    def __init__(self, out: str) -> None:
        self._log = open(os.path.join(out, "log.log"), "w", encoding="utf-8")
        try:
            self._app_log = open(os.path.join(out, "app.log"), "w", encoding="utf-8")
        except OSError:
            self._log.close()
            raise
        self.indent_level = 0
        self.indent_str = "    "
        self.categories: list[str] = []
        self.paused = False

    def __enter__(self) -> "SystemLog":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._log.close()
        self._app_log.close()

    def newline(self) -> "SystemLog":
        return self.message("")

    def indent(self) -> "SystemLog":
        self.indent_level = min(self.indent_level + 1, _MAX_INDENT)
        return self

    def unindent(self) -> "SystemLog":
        self.indent_level = max(self.indent_level - 1, 0)
        return self

    def alert(self, string: Any) -> "SystemLog":
        return self.message(f"ALERT: {string}")

    def header(self, string: Any) -> "SystemLog":
        self.debug_log("header", string)
        self._log.write(f"[ {str(string):=^50} ]\n")
        return self

    def message(self, string: Any) -> "SystemLog":
        self.debug_log("message", string)
        if not self.paused:
            self._log.write(self.indent_str * len(self.categories))
            self._log.write(f"{string}\n")
        return self

    def pause(self) -> "SystemLog":
        self.paused = True
        return self

    def unpause(self) -> "SystemLog":
        self.paused = False
        return self

    def begin_category(self, category: Any) -> "SystemLog":
        self.indent()
        self.debug_log("category start", "")
        self.message(f"[ {f' {category} ':-^15} ]")
        self.categories.append(str(category))
        return self

    def state_property(self, prop: Any, value: Any) -> "SystemLog":
        self.debug_log("parsed property", f"[{'.'.join(self.categories)}.{prop}]")
        self.debug_log("data", f"indent is [{self.indent_level}]")
        if self.indent_level != 0:
            return self.message(f"|{str(prop):_>15}: {value}")
        return self.message(f"{str(prop):>15}: {value}")

    def end_category(self) -> "SystemLog":
        self.unindent()
        exiting = self.categories.pop() if self.categories else ""
        self.debug_log("category end", f"[/{exiting}]")
        return self

    def _status_log(self, logtype: str, status: str, string: Any) -> "SystemLog":
        self._app_log.write(f"[{status:>5}] [{logtype:>20}]: {string}\n")
        return self

    def debug_log(self, logtype: str, string: Any) -> "SystemLog":
        return self._status_log(logtype, "DEBUG", string)

    def info_log(self, logtype: str, string: Any) -> "SystemLog":
        return self._status_log(logtype, "INFO", string)

    def warn_log(self, logtype: str, string: Any) -> "SystemLog":
        return self._status_log(logtype, "WARN", string)

    def error_log(self, logtype: str, string: Any) -> "SystemLog":
        return self._status_log(logtype, "ERROR", string)

    def fatal_log(self, logtype: str, string: Any) -> "SystemLog":
        return self._status_log(logtype, "FATAL", string)

    def sys_log(self, string: Any) -> "SystemLog":
        return self.info_log("sys", string)