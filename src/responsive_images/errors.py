"""Error hierarchy for responsive image planning."""
from __future__ import annotations

from enum import Enum


class ResponsiveImagesError(Exception):
    """Base error for all responsive_images errors."""

    code: int | None = None

    def __init__(
        self, message: str, *, cause: Exception | None = None, code: int | None = None
    ) -> None:
        super().__init__(message)
        self.cause = cause
        if code is not None:
            self.code = code


# ---------------------------------------------------------------------------
# Input errors
# ---------------------------------------------------------------------------


class MalformedSizeToken(ResponsiveImagesError):
    """A size definition's width token is not a number."""

    code = 1509741915

    def __init__(self, token: str, **kwargs) -> None:
        super().__init__(f"Image width {token!r} is not a number", **kwargs)
        self.token = token


class InvalidPixelDensity(ResponsiveImagesError):
    """A pixel density is not a positive number."""

    code = 1509741916

    def __init__(self, value: str | float, **kwargs) -> None:
        super().__init__(f"Invalid pixel density: {value!r}", **kwargs)
        self.value = value


class UnknownSpecialFunction(ResponsiveImagesError, ValueError):
    """The special function name is not recognised."""

    code = 1509741918


class InvalidFileExtension(ResponsiveImagesError):
    """The requested target extension is not a valid image file extension."""

    code = 1618989190

    def __init__(self, extension: str, allowed: tuple[str, ...], **kwargs) -> None:
        super().__init__(
            f"The extension {extension} is not specified as a valid image file "
            f"extension ({','.join(allowed)}) and can not be processed.",
            **kwargs,
        )
        self.extension = extension
        self.allowed = allowed


# ---------------------------------------------------------------------------
# Collaborator errors
# ---------------------------------------------------------------------------


class UnresolvableImage(ResponsiveImagesError):
    """The image argument is neither a handle nor exposes one."""

    code = 1625838481


class InvalidCropSpecification(ResponsiveImagesError):
    """The crop specification could not be parsed."""

    code = 1509741917


class FailureKind(Enum):
    """Why a rendition could not be produced."""

    MISSING_FILE = 1509741911
    PATH_IS_NOT_A_FILE = 1509741912
    STORAGE_UNAVAILABLE = 1509741913
    INVALID_STORAGE_REFERENCE = 1509741914


class RenditionFailure(ResponsiveImagesError):
    """The renderer failed; the whole picture is abandoned."""

    def __init__(
        self, message: str, *, kind: FailureKind, cause: Exception | None = None
    ) -> None:
        super().__init__(message, cause=cause, code=kind.value)
        self.kind = kind

    @classmethod
    def from_exception(cls, exc: Exception) -> RenditionFailure | None:
        """Classify a bare renderer exception, or return None if it is not a storage error."""
        if isinstance(exc, RenditionFailure):
            return exc
        if isinstance(exc, FileNotFoundError):
            kind = FailureKind.MISSING_FILE
        elif isinstance(exc, (IsADirectoryError, NotADirectoryError)):
            kind = FailureKind.PATH_IS_NOT_A_FILE
        elif isinstance(exc, OSError):
            kind = FailureKind.STORAGE_UNAVAILABLE
        elif isinstance(exc, LookupError):
            kind = FailureKind.INVALID_STORAGE_REFERENCE
        else:
            return None
        return cls(str(exc) or type(exc).__name__, kind=kind, cause=exc)
