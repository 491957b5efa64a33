"""Exception hierarchy raised by encoders, parsers, readers and writers."""

from __future__ import annotations


class DataParseError(Exception):
    """Base class for every error raised by the package.

    Raised directly for free-form failures such as tag or delimiter mismatches.
    """


class UnexpectedEOFError(DataParseError):
    """The input ended before the requested number of bytes could be read."""

    def __init__(self, message: str = "Unexpected binary EOF") -> None:
        super().__init__(message)


class InvalidConversionError(DataParseError):
    """Bytes could not be converted into the requested value."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Invalid conversion: {detail}")


class ParseIOError(DataParseError):
    """An underlying stream failed while reading or writing."""

    def __init__(self, cause: BaseException | str) -> None:
        self.cause = cause
        super().__init__(f"IO error: {cause}")


class CryptoError(DataParseError):
    """Encryption or decryption failed."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Crypto error: {detail}")