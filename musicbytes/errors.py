# errors.py
"""
Error taxonomy for musicbytes.

Library code raises these; only the CLI (main.py) turns them into
messages and exit codes. Each class carries the exit code a scripting
caller can branch on.
"""


class MusicBytesError(Exception):
    exit_code = 1


class ModeError(MusicBytesError):
    """Unrecognized output mode token."""
    exit_code = 2


class InputError(MusicBytesError):
    """Input file missing or unreadable."""
    exit_code = 3


class OutputError(MusicBytesError):
    """Destination not writable (permissions, disk full, bad path)."""
    exit_code = 4


class ConfigError(MusicBytesError, ValueError):
    """Invalid synthesis or mapping parameters."""
    exit_code = 5
