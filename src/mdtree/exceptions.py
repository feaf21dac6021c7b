#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the mdtree library.

This module defines specialized exception classes for the error conditions
that can occur while building a generic element tree, lowering it to the
Markdown AST, and configuring the renderer.

Exception Hierarchy
-------------------
- MdTreeError (base exception)

  - ValidationError (parameter/option validation)
    - PropertyTypeError (element property of the wrong type or value)
    - InvalidOptionsError (wrong options class for a renderer)

  - TreeError (generic tree construction and lowering)
    - UnsupportedRoleError (element created with an unknown role)
    - UnknownRoleError (lowering met a role outside the vocabulary)
    - InvariantError (store used in a way that breaks tree invariants)

  - ConfigError (configuration file loading)

Structural irregularities in the tree (stray inline nodes, non-item list
children, empty containers) are normalized by the lowering pass and never
raise.

"""

from typing import Any


class MdTreeError(Exception):
    """Base exception class for all mdtree-specific errors.

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


class ValidationError(MdTreeError):
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


class PropertyTypeError(ValidationError):
    """Exception raised when an element property has the wrong type or value.

    Property maps come from the driving framework as free-form dictionaries.
    Validators in :mod:`mdtree.utils.validate` reject mismatches instead of
    coercing them.

    Parameters
    ----------
    expected : str
        Description of the expected type (e.g. ``"string"``)
    value : any
        The value that was received
    property_name : str, optional
        Name of the offending property
    message : str, optional
        Custom error message

    """

    def __init__(
        self,
        expected: str,
        value: Any,
        property_name: str | None = None,
        message: str | None = None,
    ):
        """Initialize the property type error."""
        if message is None:
            where = f" for property '{property_name}'" if property_name else ""
            message = f"Expected {expected}{where}, got {type(value).__name__}"
        super().__init__(message, parameter_name=property_name, parameter_value=value)
        self.expected = expected


class InvalidOptionsError(ValidationError):
    """Exception raised when an incorrect options object is provided to a renderer.

    Parameters
    ----------
    renderer_name : str
        Name of the renderer that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        renderer_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{renderer_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(message, parameter_name="options", parameter_value=received_type)
        self.renderer_name = renderer_name
        self.expected_type = expected_type
        self.received_type = received_type


class TreeError(MdTreeError):
    """Base exception for generic tree construction and lowering errors."""


class UnsupportedRoleError(TreeError):
    """Exception raised when an element is created with a role outside the vocabulary.

    Parameters
    ----------
    role : str
        The rejected role name

    """

    def __init__(self, role: Any):
        """Initialize the unsupported role error."""
        super().__init__(f"Unsupported element role: {role!r}")
        self.role = role


class UnknownRoleError(TreeError):
    """Exception raised when the lowering pass meets an unknown role.

    This can only happen when a record was modified behind the store's back,
    since :meth:`TreeStore.create_element` validates roles up front.

    Parameters
    ----------
    role : str
        The unknown role name

    """

    def __init__(self, role: Any):
        """Initialize the unknown role error."""
        super().__init__(f"Unknown node role: {role!r}")
        self.role = role


class InvariantError(TreeError):
    """Exception raised when a store operation would break a tree invariant."""


class ConfigError(MdTreeError):
    """Exception raised when a configuration file cannot be loaded.

    Parameters
    ----------
    message : str
        Description of the problem
    config_path : str, optional
        Path of the configuration file involved
    original_error : Exception, optional
        The underlying parse or I/O error

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Initialize the configuration error."""
        super().__init__(message, original_error=original_error)
        self.config_path = config_path
