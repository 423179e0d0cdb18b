# topmark:header:start
#
#   project      : ChainReaction
#   file         : exit_codes.py
#   file_relpath : src/chain_reaction/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""Exit codes for the Chain Reaction CLI.

Values follow the BSD `sysexits` convention where practical, so that other
tooling can interpret failures consistently.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the Chain Reaction CLI.

    Attributes:
        SUCCESS: The command completed; for ``demo``, the pipeline ended in `Success`.
        FAILURE: The pipeline ended in `Failure` (or a non-specific error occurred).
        USAGE_ERROR: Command-line invocation error (invalid flags/args). Mirrors
            BSD ``EX_USAGE (64)``.
        PIPELINE_ERROR: A pipeline could not be built or raised out of ``run()``.
            Mirrors BSD ``EX_SOFTWARE (70)``.
        CONFIG_ERROR: Configuration error (missing/invalid/malformed config).
            Mirrors BSD ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Unhandled/unknown error (last-resort).
    """

    SUCCESS = 0
    FAILURE = 1

    USAGE_ERROR = 64  # EX_USAGE
    PIPELINE_ERROR = 70  # EX_SOFTWARE
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255
