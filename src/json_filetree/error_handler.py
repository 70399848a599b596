"""Error handling implementation for the JSON file tree converter."""

import logging
from typing import Optional
from .types import (
    ErrorHandlerInterface,
    ValidationResult,
    ValidationError,
    ErrorResponse,
    ConversionError,
    ErrorType
)
from .utils.validation import ValidationUtils


class ErrorHandler(ErrorHandlerInterface):
    """
    Error handler for conversion operations.

    Validates input text and turns conversion errors into
    suggestions for the caller.
    """

    def __init__(self, max_input_bytes: Optional[int] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the error handler.

        Args:
            max_input_bytes: Optional input size limit applied by validate_input
            logger: Optional logger instance for error reporting
        """
        self.max_input_bytes = max_input_bytes
        self.logger = logger or logging.getLogger(__name__)

    def validate_input(self, input_data: str) -> ValidationResult:
        """
        Validate input JSON string.

        Args:
            input_data: JSON string to validate

        Returns:
            ValidationResult with validation details
        """
        if not isinstance(input_data, str):
            return ValidationResult(
                is_valid=False,
                errors=[ValidationError(
                    type=ErrorType.SYNTAX,
                    message=f"Input must be a string, got {type(input_data).__name__}",
                    location="input"
                )],
                warnings=[]
            )

        result = ValidationUtils.validate_json_string(input_data, self.max_input_bytes)
        for warning in result.warnings:
            self.logger.warning(warning)
        return result

    def handle_conversion_error(self, error: ConversionError) -> ErrorResponse:
        """
        Handle conversion errors and provide recovery suggestions.

        Args:
            error: ConversionError to handle

        Returns:
            ErrorResponse with recovery information
        """
        self.logger.error(f"Conversion error: {error.error_type.value} - {error}")

        if error.error_type == ErrorType.SYNTAX:
            return ErrorResponse(
                can_recover=True,
                suggested_action="Fix the JSON syntax near the reported position and retry."
            )
        elif error.error_type == ErrorType.SIZE:
            return ErrorResponse(
                can_recover=True,
                suggested_action="Reduce the input size or raise the maximum input size limit."
            )
        elif error.error_type == ErrorType.DEPTH:
            return ErrorResponse(
                can_recover=True,
                suggested_action="Flatten the document or raise the maximum depth limit."
            )
        elif error.error_type == ErrorType.NAME:
            return ErrorResponse(
                can_recover=True,
                suggested_action="Rename keys that are empty, '.', '..' or contain '/'."
            )
        elif error.error_type == ErrorType.STRUCTURE:
            return ErrorResponse(
                can_recover=True,
                suggested_action="Give file-like objects a 'content' field, "
                                 "or a 'data' field alongside \"type\": \"file\"."
            )
        elif error.error_type == ErrorType.ARCHIVE:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Archive generation failed. Check available memory and retry."
            )
        else:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Unknown error type. Please check logs and retry."
            )
