"""Running application snapshots using AppleScript."""

from typing import List, Optional
from ..exceptions import AppleScriptError
from ..models import AppSnapshot
from ..utils import AppleScriptExecutor

# Create a module-level executor instance
_executor = AppleScriptExecutor()

# One line per foreground process: name<TAB>bundle id<TAB>bundle path
_LIST_APPS_SCRIPT = '''
tell application "System Events"
    set appList to ""
    set processList to every process whose background only is false
    repeat with proc in processList
        try
            set appLine to (name of proc) & tab & (bundle identifier of proc)
            try
                set appLine to appLine & tab & (POSIX path of (application file of proc))
            end try
            set appList to appList & appLine & linefeed
        end try
    end repeat
    return appList
end tell
'''


def parse_app_listing(output: Optional[str]) -> List[AppSnapshot]:
    """
    Parse the tab-separated process listing produced by the AppleScript query.

    Lines without a usable bundle identifier are skipped.

    Args:
        output: Raw osascript output

    Returns:
        List of AppSnapshot in listing order
    """
    apps: List[AppSnapshot] = []
    if not output:
        return apps

    for line in output.splitlines():
        parts = [part.strip() for part in line.split("\t")]
        if len(parts) < 2:
            continue
        name, identifier = parts[0], parts[1]
        if not name or not identifier or identifier == "missing value":
            continue
        icon = parts[2] if len(parts) > 2 and parts[2] else None
        apps.append(AppSnapshot(name=name, identifier=identifier, icon=icon))
    return apps


def list_running_applications() -> List[AppSnapshot]:
    """
    Get the currently running, non-background applications.

    The icon handle of each snapshot is the application bundle path.

    Returns:
        List of AppSnapshot, empty if the query fails
    """
    try:
        output = _executor.run(_LIST_APPS_SCRIPT)
    except AppleScriptError as e:
        print(f"Error listing running apps: {e}")
        return []
    return parse_app_listing(output)
