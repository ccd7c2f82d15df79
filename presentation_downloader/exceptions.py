"""
Custom exceptions for Presentation Downloader.

This module defines all custom exceptions used throughout the library.
Validation errors, an empty presentation, a slide that cannot be saved
and a failed document finalisation stop a run; the per-item errors are raised inside a single
task or page and absorbed by the component that owns it.
"""


class PresentationDownloaderException(Exception):
    """Base exception for all Presentation Downloader errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown presentation downloader error occurred."


class ValidationError(PresentationDownloaderException):
    """Raised when user supplied input is rejected before any work starts."""

    @property
    def default_message(self) -> str:
        return "Invalid input."


class InvalidURLError(ValidationError):
    """Raised when the base URL is missing or uses an unsupported scheme."""

    @property
    def default_message(self) -> str:
        return "URL must start with http:// or https://"


class InvalidModeError(ValidationError):
    """Raised when the retention mode selection is not one of the six modes."""

    @property
    def default_message(self) -> str:
        return "Invalid choice. Expected a number between 1 and 6."


class ZeroResourcesError(PresentationDownloaderException):
    """Raised when the very first slide is absent."""

    @property
    def default_message(self) -> str:
        return "No slides were downloaded."


class StorageError(PresentationDownloaderException):
    """Raised when a downloaded slide cannot be written to disk."""

    @property
    def default_message(self) -> str:
        return "Failed to save slide."


class ConversionError(PresentationDownloaderException):
    """Raised when a single slide cannot be rasterized."""

    @property
    def default_message(self) -> str:
        return "Failed to convert slide."


class PagePlacementError(PresentationDownloaderException):
    """Raised when a single image cannot be placed on its page."""

    @property
    def default_message(self) -> str:
        return "Failed to place image on page."


class NoArtifactsError(PresentationDownloaderException):
    """Raised when a document is requested from an empty artifact list."""

    @property
    def default_message(self) -> str:
        return "No PNG files to create PDF from."


class AssemblyError(PresentationDownloaderException):
    """Raised when the finished document cannot be written."""

    @property
    def default_message(self) -> str:
        return "PDF creation failed."


class OrderingContractError(PresentationDownloaderException):
    """Raised when artifacts are not strictly ascending by slide index."""

    @property
    def default_message(self) -> str:
        return "Artifacts must be sorted by ascending slide index."
