from enum import Enum


class ErrorType(str, Enum):
    InvalidInput = "InvalidInput"
    NoValidAddress = "NoValidAddress"
    Overflow = "Overflow"
    InvalidLength = "InvalidLength"
    NoAccountData = "NoAccountData"
    InvalidRecordData = "InvalidRecordData"
    StaleRecord = "StaleRecord"


class SNSError(Exception):
    """Base error for every failure raised by the SDK."""

    type = None

    def __init__(self, message: str = None):
        super().__init__(message or self.type.value)
        self.message = message or self.type.value


class InvalidInputError(SNSError):
    type = ErrorType.InvalidInput


class NoValidAddressError(SNSError):
    type = ErrorType.NoValidAddress


class IntegerOverflowError(SNSError):
    type = ErrorType.Overflow


class InvalidLengthError(SNSError):
    type = ErrorType.InvalidLength


class NoAccountDataError(SNSError):
    type = ErrorType.NoAccountData


class InvalidRecordDataError(SNSError):
    type = ErrorType.InvalidRecordData


class StaleRecordError(SNSError):
    """Raised in strict mode when a record was not validated by the current owner."""

    type = ErrorType.StaleRecord

    def __init__(self, message: str = None, record=None):
        super().__init__(message)
        self.record = record
