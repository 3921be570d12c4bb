from fastapi import status
from libs.result import Error
from src.app.use_cases.printshop.error_codes import ErrorCode

STATUS_BY_CODE = {
    ErrorCode.INVALID_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_AMOUNT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.DUPLICATE_STUDENT: status.HTTP_409_CONFLICT,
    ErrorCode.DUPLICATE_REFERENCE: status.HTTP_409_CONFLICT,
    ErrorCode.STUDENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.RULE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.WALLET_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INSUFFICIENT_FUNDS: status.HTTP_402_PAYMENT_REQUIRED,
    ErrorCode.CONFLICT_RETRYABLE: status.HTTP_409_CONFLICT,
}


class ClientError(Exception):
    """Use-case error surfaced to the HTTP client as {"error": {code, message}}"""

    def __init__(self, error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code

    @classmethod
    def from_error(cls, error: Error) -> "ClientError":
        return cls(error, status_code=STATUS_BY_CODE.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR))

    def to_body(self) -> dict:
        return {"error": {"code": self.error.code, "message": self.error.message}}
