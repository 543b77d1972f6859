class FetchError(Exception):
    """Base class for failures that abort a zerofetch run."""


class PreconditionError(FetchError):
    """Layout inputs can't produce a meaningful ratio (zero-sized art, bad ratio)."""


class TerminalSizeError(PreconditionError):
    """The terminal size could not be read or is zero."""


class ArtSourceError(FetchError):
    """The selected art couldn't be loaded (missing art file, unknown figlet font)."""


class ImageDecodeError(ArtSourceError):
    """The requested image could not be opened or decoded."""
