"""Domain errors raised by the bank, game and mission services.

Each carries the HTTP status the global error handler answers with.
"""


class PartyBankError(ValueError):
    status_code = 400


class UserNotFoundError(PartyBankError):
    status_code = 404


class InsufficientBalanceError(PartyBankError):
    pass


class InvalidRiskLevelError(PartyBankError):
    pass


class UnknownCodeError(PartyBankError):
    status_code = 404


class AlreadyClaimedError(PartyBankError):
    status_code = 409


class CodeExhaustedError(PartyBankError):
    status_code = 409


class OutOfOrderScanError(PartyBankError):
    status_code = 409


class ChainCompletedError(PartyBankError):
    status_code = 409


class UnknownTraitError(PartyBankError):
    status_code = 404


class MissionNotFoundError(PartyBankError):
    status_code = 404


class MissionStateError(PartyBankError):
    status_code = 409
