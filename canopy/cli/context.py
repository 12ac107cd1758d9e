from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from canopy.net.http import HttpClient, RealHttpClient
from canopy.output.console import ConsoleProtocol, RichConsole

TOKEN_ENV_VAR = "GITHUB_TOKEN"


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    console: ConsoleProtocol

    def http(self, timeout: float) -> HttpClient:
        return RealHttpClient(timeout=timeout, token=os.environ.get(TOKEN_ENV_VAR) or None)


def build_context(root: Path | None) -> CLIContext:
    base = root.expanduser() if root is not None else Path.cwd()
    return CLIContext(root=base.resolve(), console=RichConsole())
