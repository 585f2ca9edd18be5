"""
Error taxonomy for threadtable.

Every error carries the process exit code the command-line interface
should return for it, so the mapping lives next to the condition:

- ConfigurationError: missing or contradictory options (caller misuse)
- ValidationError: well-formed but semantically invalid values
- GenderError: gender outside internal/external on a calculator
- XmlParseError: malformed document or unexpected root element
- AngleMismatchError: existing document disagrees on the thread angle
- IoError: file unreadable or unwritable

Usage, data and I/O exit codes follow BSD sysexits.h.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit codes"""
    OK = 0
    USAGE = 64  # EX_USAGE
    DATA = 65  # EX_DATAERR
    XML_PARSE = 66
    ANGLE_MISMATCH = 67
    IO = 74  # EX_IOERR


class ThreadTableError(Exception):
    """Base class for all threadtable errors."""
    exit_code: ExitCode = ExitCode.DATA


class ConfigurationError(ThreadTableError):
    """Raised when required options are missing or contradict each other."""
    exit_code = ExitCode.USAGE


class ValidationError(ThreadTableError):
    """Raised when option or document values are semantically invalid."""
    exit_code = ExitCode.DATA


class GenderError(ThreadTableError):
    """Raised when a thread gender is not internal or external."""
    exit_code = ExitCode.DATA


class XmlParseError(ThreadTableError):
    """Raised when an existing document is malformed or has the wrong root."""
    exit_code = ExitCode.XML_PARSE


class AngleMismatchError(ThreadTableError):
    """Raised when an existing document's thread angle differs from the requested one."""
    exit_code = ExitCode.ANGLE_MISMATCH


class IoError(ThreadTableError):
    """Raised when a file cannot be read or written."""
    exit_code = ExitCode.IO
