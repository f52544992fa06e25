"""Application activation using AppleScript."""

from .utils import AppleScriptExecutor, escape_applescript_string

__all__ = ['activate_app']

# Create a module-level executor instance
_executor = AppleScriptExecutor()


def activate_app(identifier: str) -> bool:
    """
    Bring a running application to the front by bundle identifier.

    Args:
        identifier: Bundle identifier of the application

    Returns:
        True if successful, False otherwise
    """
    script = f'tell application id "{escape_applescript_string(identifier)}" to activate'
    success, _, stderr = _executor.execute(script)
    if not success:
        print(f"Error activating '{identifier}': {stderr}")
    return success
