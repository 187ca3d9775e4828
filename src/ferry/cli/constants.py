"""Exit statuses reported by the CLI itself.

Any other non-zero status is propagated from the first failing docker or ssh
command.
"""

ARGUMENT_ERROR_EXIT_CODE = 1
USAGE_ERROR_EXIT_CODE = 125
INTERRUPTED_EXIT_CODE = 130
