"""Custom exception classes for the category switcher."""


class SwitcherError(Exception):
    """Base exception for category switcher errors."""
    pass


class ClassifierError(SwitcherError):
    """Exception raised for remote classification errors."""
    pass


class ClassifierNotConfiguredError(ClassifierError):
    """Exception raised when no remote endpoint or API key is configured."""
    pass


class ClassifierConnectionError(ClassifierError):
    """Exception raised when the classification endpoint cannot be reached or times out."""
    pass


class ClassifierParseError(ClassifierError):
    """Exception raised when the response does not name a known category."""
    pass


class SessionError(SwitcherError):
    """Exception raised when a closed switch session is advanced."""
    pass


class AppleScriptError(SwitcherError):
    """Exception raised for AppleScript execution errors."""
    pass
