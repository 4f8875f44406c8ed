# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Console rendering for CLI runs."""

from __future__ import annotations

import sys
from typing import TextIO

from colorama import Fore, Style, just_fix_windows_console

from ..models import Result
from ..version import __version__

BANNER = r"""
                              _
  ___ ___  _ __ ___ _ __ ___ (_)___  ___
 / __/ _ \| '__/ __| '_ ` _ \| / __|/ __|
| (_| (_) | |  \__ \ | | | | | \__ \ (__
 \___\___/|_|  |___/_| |_| |_|_|___/\___| v{version}
"""


class ConsoleReporter:
    """Writes the banner, per-result status lines and run summaries."""

    def __init__(self, *, color: bool = True, out: TextIO | None = None, err: TextIO | None = None):
        self.color = color
        self.out = out or sys.stdout
        self.err = err or sys.stderr
        if color:
            just_fix_windows_console()

    def _paint(self, text: str, *styles: str) -> str:
        if not self.color:
            return text
        return "".join(styles) + text + Style.RESET_ALL

    def banner(self) -> None:
        self.err.write(self._paint(BANNER.format(version=__version__), Fore.LIGHTBLUE_EX, Style.BRIGHT) + "\n")

    def result(self, result: Result) -> None:
        if result.exploitable:
            label = self._paint("[VULNERABLE]", Fore.RED, Style.BRIGHT)
        else:
            label = self._paint("[REFLECTED]", Fore.YELLOW)
        origins = ", ".join(result.acao)
        acac = "-" if result.acac is None else result.acac
        self.out.write(f"{label} {result.url}  ACAO: {origins}  ACAC: {acac}\n")
        self.out.flush()

    def info(self, message: str) -> None:
        self.err.write(self._paint("[*] ", Fore.CYAN) + message + "\n")

    def error(self, message: str) -> None:
        self.err.write(self._paint("[!] ", Fore.RED, Style.BRIGHT) + message + "\n")

    def summary(self, results: list[Result]) -> None:
        exploitable = sum(1 for result in results if result.exploitable)
        self.info(f"{len(results)} target(s) reflected an origin, {exploitable} with credentials allowed")
