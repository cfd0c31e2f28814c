#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the tree2md library.

This module defines the exception classes raised while converting node trees
to Markdown. Rule tables are trusted, compile-time configuration, so a
malformed rule is reported immediately instead of being worked around.

Exception Hierarchy
-------------------
- Tree2MdError (base exception)

  - ValidationError (parameter/option validation)
    - TranslatorConfigError (malformed translator rule)

  - FileError (file access and I/O for the CLI wrapper)

  - ParsingError (HTML adapter failures)

  - RenderingError (output generation failures)

"""

from typing import Any


class Tree2MdError(Exception):
    """Base exception class for all tree2md-specific errors.

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


class ValidationError(Tree2MdError):
    """Exception raised for invalid parameters or options.

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

    Attributes
    ----------
    parameter_name : str or None
        The name of the problematic parameter
    parameter_value : any
        The value that caused the error

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


class TranslatorConfigError(ValidationError):
    """Exception raised for a malformed translator rule.

    Examples are a rule declaring literal ``content`` together with a
    ``postprocess`` hook, ``surrounding_newlines`` outside ``0..2``, or a
    factory whose compute function returns something other than a rule.

    Parameters
    ----------
    message : str
        Description of the configuration problem
    tag : str, optional
        Tag the rule is registered for, when known
    parameter_name : str, optional
        Rule field at fault
    parameter_value : any, optional
        The offending value

    """

    def __init__(
        self,
        message: str,
        tag: str | None = None,
        parameter_name: str | None = None,
        parameter_value: Any = None,
    ):
        """Initialize the translator configuration error."""
        if tag:
            message = f"Translator for <{tag}>: {message}"
        super().__init__(message, parameter_name=parameter_name, parameter_value=parameter_value)
        self.tag = tag


class FileError(Tree2MdError):
    """Exception raised for file access and I/O errors in the CLI wrapper.

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


class ParsingError(Tree2MdError):
    """Exception raised when the HTML adapter cannot build a node tree.

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


class RenderingError(Tree2MdError):
    """Exception raised when output rendering fails.

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
