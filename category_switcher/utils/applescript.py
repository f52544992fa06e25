"""AppleScript execution utilities."""

import subprocess
from typing import NamedTuple, Optional
from ..exceptions import AppleScriptError


def escape_applescript_string(text: str) -> str:
    """
    Escape special characters for AppleScript string literals.

    Args:
        text: String to escape

    Returns:
        Escaped string safe for use in AppleScript
    """
    # Backslashes must be escaped first
    text = text.replace("\\", "\\\\")
    text = text.replace('"', '\\"')
    text = text.replace("\n", "\\n")
    text = text.replace("\r", "\\r")
    return text.replace("\t", "\\t")


class ScriptResult(NamedTuple):
    success: bool
    stdout: Optional[str]
    stderr: Optional[str]


class AppleScriptExecutor:
    """Runs AppleScript through osascript with a bounded wait."""

    def __init__(self, timeout: float = 5.0):
        """
        Initialize the AppleScript executor.

        Args:
            timeout: Seconds to wait for osascript before giving up
        """
        self.timeout = timeout

    def execute(self, script: str) -> ScriptResult:
        """
        Execute an AppleScript snippet.

        Args:
            script: AppleScript code to execute

        Returns:
            ScriptResult with success flag and stripped output (None if empty)
        """
        try:
            result = subprocess.run(
                ["osascript", "-e", script],
                capture_output=True,
                text=True,
                timeout=self.timeout
            )
        except subprocess.TimeoutExpired:
            return ScriptResult(False, None, f"osascript timed out after {self.timeout}s")
        except OSError as e:
            return ScriptResult(False, None, str(e))

        stdout = result.stdout.strip() or None
        stderr = result.stderr.strip() or None
        return ScriptResult(result.returncode == 0, stdout, stderr)

    def run(self, script: str) -> Optional[str]:
        """
        Execute an AppleScript snippet, raising on failure.

        Returns:
            Standard output, or None if empty

        Raises:
            AppleScriptError: If osascript fails or times out
        """
        result = self.execute(script)
        if not result.success:
            raise AppleScriptError(result.stderr or "osascript failed")
        return result.stdout
