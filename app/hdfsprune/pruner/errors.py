"""Exception hierarchy for the pruning workflow.

Configuration errors are raised before any external command runs.
ListingParseError is the only non-fatal error: the pruner logs it and
skips the line. Everything else aborts the remaining work.
"""


class PruneError(Exception):
    """Base exception for all pruning errors."""


class ConfigurationError(PruneError):
    """Raised for invalid ages, batch sizes, paths, regexes or client binaries."""


class ListingParseError(PruneError):
    """Raised when a listing line does not match the expected grammar."""

    def __init__(self, line: str) -> None:
        self.line = line
        super().__init__(f'failed to match line from hadoop output: "{line}"')


class TimestampError(PruneError):
    """Raised when a listing line carries an impossible date or time."""


class NoFilesFoundError(PruneError):
    """Raised when the listing produced no file entries at all."""


class CommandTooLongError(PruneError):
    """Raised when a batch deletion command would exceed the command-line limit.

    Attributes:
        command: The would-be command text.
        length: Length of the command text.
        arg_max: Effective command-line limit it was checked against.
    """

    def __init__(self, command: str, length: int, arg_max: int, allowance: int) -> None:
        self.command = command
        self.length = length
        self.arg_max = arg_max
        super().__init__(
            f"hadoop fs -rm command length ({length}) + environment and safety "
            f"allowance ({allowance}) exceeds the operating system's ARG_MAX "
            f"({arg_max}). Reduce the batch size, this is usually caused by very "
            "long filenames coupled with a large batch size."
        )


class DeletionError(PruneError):
    """Raised when the hadoop fs -rm command exits with a failure status.

    Attributes:
        returncode: Exit status of the deletion command.
    """

    def __init__(self, returncode: int) -> None:
        self.returncode = returncode
        super().__init__(f'{returncode} returned from command "hadoop fs -rm ..."')


class DeletionInterruptedError(PruneError):
    """Raised when the deletion command was interrupted with Control-C."""
