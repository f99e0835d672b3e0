#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the htmlmark library.

This module defines specialized exception classes for the error conditions
that can occur while parsing HTML and rendering it to Markdown. These
exceptions provide more specific error information than generic built-ins.

Exception Hierarchy
-------------------
- HtmlMarkError (base exception)

  - ValidationError (parameter/option validation)

  - FileError (file access and I/O)
    - FileNotFoundError (file doesn't exist)
    - FileAccessError (permissions, decoding, unreadable streams)

  - ParsingError (markup parsing failures)

  - RenderingError (Markdown generation failures)
    - TraversalError (iterator/walker alignment violations)
    - DepthLimitError (tree nested deeper than the configured limit)

  - DependencyError (missing parser backends)

"""

from typing import Any


class HtmlMarkError(Exception):
    """Base exception class for all htmlmark-specific errors.

    Catching this will catch all library-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(HtmlMarkError, ValueError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class FileError(HtmlMarkError):
    """Base exception for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class FileNotFoundError(FileError):
    """Exception raised when an input file cannot be found."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file not found error."""
        if message is None:
            message = f"File not found: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class FileAccessError(FileError):
    """Exception raised when an input file or stream cannot be read or decoded."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file access error."""
        if message is None:
            message = f"Cannot access file: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class ParsingError(HtmlMarkError):
    """Exception raised when the markup parser fails.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class RenderingError(HtmlMarkError):
    """Exception raised when Markdown rendering fails.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class TraversalError(RenderingError):
    """Exception raised when the tree iterator and the tree walker fall out of step.

    This signals a broken contract between the parser, the iterator and the
    walker (a cursor that is not on the child the walker expects, or an
    iterator read before it produced a node). It is never raised for ordinary
    end-of-sequence, which ``TreeIterator.advance`` reports by returning False.

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the traversal error."""
        super().__init__(message, rendering_stage="traversal", original_error=original_error)


class DepthLimitError(RenderingError):
    """Exception raised when the document is nested deeper than ``max_depth``.

    Parameters
    ----------
    max_depth : int
        The configured nesting limit that was exceeded

    """

    def __init__(self, max_depth: int, message: str | None = None):
        """Initialize the depth limit error."""
        if message is None:
            message = f"Document nesting exceeds the maximum depth of {max_depth}"
        super().__init__(message, rendering_stage="traversal")
        self.max_depth = max_depth


class DependencyError(HtmlMarkError):
    """Exception raised when a required parser backend is not available.

    Parameters
    ----------
    feature : str
        The feature requiring the dependency (e.g. ``"lxml parser"``)
    missing_packages : list[str]
        Distribution names that need to be installed
    message : str, optional
        Custom error message. If not provided, generates one with an install hint

    """

    def __init__(
        self,
        feature: str,
        missing_packages: list[str],
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the dependency error with package details."""
        if message is None:
            pkg_list = ", ".join(f"'{name}'" for name in missing_packages)
            message = f"{feature} requires the following packages: {pkg_list}"
            if missing_packages:
                message += f"\nInstall with: pip install {' '.join(missing_packages)}"
        super().__init__(message, original_error=original_error)
        self.feature = feature
        self.missing_packages = missing_packages
