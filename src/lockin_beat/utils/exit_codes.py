"""
Exit codes for the Lock-in Beat CLI.

Semantic exit codes so scripts can tell a failed focus session apart from
a usage error.
"""

# Success (session completed or skipped)
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# Resource not found (unknown track, unknown config key)
ERROR_NOT_FOUND = 5

# The focus session ended in failure
SESSION_FAILED = 10


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
        SESSION_FAILED: "SESSION_FAILED",
    }
    return code_names.get(code, f"UNKNOWN({code})")


def get_exit_code_description(code: int) -> str:
    """Get a human-readable description of an exit code."""
    descriptions = {
        SUCCESS: "Command executed successfully",
        ERROR_GENERAL: "A general error occurred",
        ERROR_INVALID_ARGS: "Invalid arguments or validation error",
        ERROR_NOT_FOUND: "Resource not found",
        SESSION_FAILED: "The focus session failed",
    }
    return descriptions.get(code, "Unknown error")
