"""Exceptions raised by pslist."""


class PslistError(Exception):
    """Base class for pslist errors."""


class ArgumentError(PslistError):
    """Bad, missing or conflicting command-line arguments."""


class SelectionError(PslistError):
    """The requested processes could not be selected."""
