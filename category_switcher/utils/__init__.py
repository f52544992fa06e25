"""Utility modules for the category switcher."""

from .applescript import AppleScriptExecutor, ScriptResult, escape_applescript_string

__all__ = ["AppleScriptExecutor", "ScriptResult", "escape_applescript_string"]
