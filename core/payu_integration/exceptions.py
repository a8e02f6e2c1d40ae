"""
PayU Integration Custom Exceptions

This module provides the exception classes raised while handling PayU
Instant Payment Notifications. They follow a small hierarchy so that the
IPN view can tell caller-visible rejections apart from failures that only
the site administrator should hear about.

Author: DSP Development Team
Version: 1.0.0
"""

from typing import Any, Dict, Optional


class PayuException(Exception):
    """
    Base exception class for all PayU integration errors.

    Attributes:
        message (str): Human-readable error message
        status_code (Optional[int]): HTTP status code if applicable
        details (Optional[Dict[str, Any]]): Additional error details

    Example:
        >>> try:
        ...     gateway.verify(notification)
        ... except PayuException as e:
        ...     logger.error(f"PayU error: {e.message}")
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for serialization.

        Returns:
            Dictionary representation of the exception
        """
        return {
            "message": self.message,
            "status_code": self.status_code,
            "details": self.details,
            "exception_type": self.__class__.__name__,
        }


class InvalidNotificationError(PayuException):
    """
    Raised when an inbound notification fails the admission or parse checks.

    The message is shown to the caller as-is, so it stays generic and never
    contains request data.
    """

    def __init__(self, message: str = "Sorry, you can not use the script that way.") -> None:
        super().__init__(message=message, status_code=400)


class GatewayUnreachableError(PayuException):
    """
    Raised when the validation call to PayU fails or returns an empty body.

    Attributes:
        location (Optional[str]): Validation endpoint that was called
    """

    def __init__(
        self,
        message: str = "Could not access payu.com to verify payment",
        location: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        self.location = location
        details = {}
        if location:
            details["location"] = location
        super().__init__(message=message, status_code=status_code, details=details)


class DuplicateTransactionError(PayuException):
    """
    Raised when a valid record for the same transaction id already exists.

    Attributes:
        txn_id (str): The repeated transaction id
    """

    def __init__(self, txn_id: str) -> None:
        self.txn_id = txn_id
        super().__init__(
            message=f"Transaction {txn_id} is being repeated!",
            details={"txn_id": txn_id},
        )
