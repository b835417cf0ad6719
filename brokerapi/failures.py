"""Errors a broker can raise to control the HTTP failure response."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Optional, Union

from brokerapi.responses import EmptyResponse, ErrorResponse


class FailureResponse(Exception):
    """An error carrying the HTTP status, log action and body to respond with."""

    def __init__(
        self,
        error: Union[BaseException, str],
        status_code: int,
        logger_action: str,
        *,
        empty_response: bool = False,
        error_key: str = "",
    ) -> None:
        super().__init__(str(error))
        self.error = error
        self.status_code = status_code
        self.logger_action = logger_action
        self.empty_response = empty_response
        self.error_key = error_key

    def error_response(self) -> Union[EmptyResponse, ErrorResponse]:
        """Return the body to encode as the HTTP response."""
        if self.empty_response:
            return EmptyResponse()
        return ErrorResponse(error=self.error_key, description=str(self))

    def validated_status_code(self, logger: Optional[logging.Logger] = None) -> int:
        """Return the status code, or 500 when it is not 4xx or 5xx."""
        if self.status_code < 400 or self.status_code >= 600:
            if logger is not None:
                logger.error(
                    "validating-status-code: Invalid failure http response code: "
                    "%d, expected 4xx or 5xx, returning internal server error: 500.",
                    self.status_code,
                )
            return int(HTTPStatus.INTERNAL_SERVER_ERROR)
        return self.status_code

    def append_error_message(self, message: str) -> FailureResponse:
        """Return a copy whose message has ``message`` appended."""
        return FailureResponse(
            f"{self} {message}",
            self.status_code,
            self.logger_action,
            empty_response=self.empty_response,
            error_key=self.error_key,
        )


class FailureResponseBuilder:
    """Fluent builder of a FailureResponse."""

    def __init__(
        self, error: Union[BaseException, str], status_code: int, logger_action: str
    ) -> None:
        self._error = error
        self._status_code = status_code
        self._logger_action = logger_action
        self._empty_response = False
        self._error_key = ""

    def with_error_key(self, error_key: str) -> FailureResponseBuilder:
        """Set the ``error`` field of the response body."""
        self._error_key = error_key
        return self

    def with_empty_response(self) -> FailureResponseBuilder:
        """Make the response body an empty JSON object."""
        self._empty_response = True
        return self

    def build(self) -> FailureResponse:
        return FailureResponse(
            self._error,
            self._status_code,
            self._logger_action,
            empty_response=self._empty_response,
            error_key=self._error_key,
        )