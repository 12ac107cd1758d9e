"""Core domain types: config, errors, results, workspaces."""

from .config import Config, ConfigError, load_config
from .errors import ErrorCode, ErrorKind, Severity, SiteError, exit_code_for
from .result import Err, Ok, Result
from .workspace import WorkspaceConfig, WorkspaceMember, find_workspace, load_workspace

__all__ = [
    # config
    "Config",
    "ConfigError",
    "load_config",
    # errors
    "ErrorCode",
    "ErrorKind",
    "Severity",
    "SiteError",
    "exit_code_for",
    # result
    "Err",
    "Ok",
    "Result",
    # workspace
    "WorkspaceConfig",
    "WorkspaceMember",
    "find_workspace",
    "load_workspace",
]
