from __future__ import annotations

from typing import Any, Dict, List, Optional


ERROR_DETAIL_INVALID_INPUTS = "invalid_inputs"
ERROR_DETAIL_RAW = "raw"
ERROR_DETAIL_NONE = "none"

ERROR_DETAIL_POLICIES = (
    ERROR_DETAIL_INVALID_INPUTS,
    ERROR_DETAIL_RAW,
    ERROR_DETAIL_NONE,
)


def _format_invalid_input(entry: Any) -> str:
    if isinstance(entry, dict):
        field = entry.get("field")
        error = entry.get("error")
        if field is not None and error is not None:
            return f"{field}: {error}"
    return str(entry)


class Response:
    """
    Typed accessor surface over one RaaS reply.

    Holds the HTTP status code and the parsed JSON body. Everything else is
    derived from the body; nothing is mutated after construction.
    """

    def __init__(
        self,
        code: int,
        parsed_response: Optional[Dict[str, Any]],
        error_detail: str = ERROR_DETAIL_INVALID_INPUTS,
    ) -> None:
        if error_detail not in ERROR_DETAIL_POLICIES:
            raise ValueError(
                f"Unknown error_detail '{error_detail}'. "
                f"Expected one of: {', '.join(ERROR_DETAIL_POLICIES)}"
            )
        self.code = code
        self.parsed_response: Dict[str, Any] = (
            parsed_response if isinstance(parsed_response, dict) else {}
        )
        self.error_detail = error_detail

    @classmethod
    def from_http(cls, raw_response, error_detail: str = ERROR_DETAIL_INVALID_INPUTS) -> "Response":
        """Build from a requests.Response-like object (``status_code`` + ``json()``)."""
        return cls(raw_response.status_code, raw_response.json(), error_detail=error_detail)

    @property
    def success(self) -> bool:
        return bool(self.parsed_response.get("success", False))

    @property
    def invalid_inputs(self) -> Optional[List[Any]]:
        return self.parsed_response.get("invalid_inputs")

    @property
    def cc_token(self) -> Optional[str]:
        return self.parsed_response.get("cc_token")

    @property
    def active_date(self) -> Optional[int]:
        return self.parsed_response.get("active_date")

    @property
    def account(self) -> Optional[Dict[str, Any]]:
        return self.parsed_response.get("account")

    @property
    def error_message(self) -> str:
        """
        Server error message, augmented according to ``error_detail``:

        - invalid_inputs: append "field: error" pairs when present
        - raw: append the full response body
        - none: bare message
        """
        message = self.parsed_response.get("error_message")
        message = "" if message is None else str(message)

        if self.error_detail == ERROR_DETAIL_RAW:
            return f"{message} -- Detailed response: {self.parsed_response}"

        if self.error_detail == ERROR_DETAIL_INVALID_INPUTS:
            invalid = self.invalid_inputs
            if invalid:
                if not isinstance(invalid, list):
                    invalid = [invalid]
                detail = "; ".join(_format_invalid_input(x) for x in invalid)
                return f"{message} -- Invalid inputs: {detail}"

        return message

    def __repr__(self) -> str:
        return f"<Response code={self.code} success={self.success}>"
