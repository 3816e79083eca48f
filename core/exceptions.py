from abc import ABC


class BaseCustomException(Exception, ABC):
    """
    Base class for failures reported to API clients.

    Subclasses pick the HTTP status and a fallback message used when
    none is given.
    """

    def __init__(self, message: str | None = None):
        self.message = message or self.get_default_message()
        super().__init__(self.message)

    def get_default_message(self) -> str:
        return "error.unknown"

    def get_status_code(self) -> int:
        """
        Return HTTP status code for exception.

        Returns
        -------
        int
            HTTP status code
        """
        return 500


class BadRequestException(BaseCustomException):
    """Client input that cannot be served (400)."""

    def get_status_code(self) -> int:
        return 400


class MissingContractAddressException(BadRequestException):
    """No contract address in the request and no configured default."""

    def get_default_message(self) -> str:
        return "error.contract_address.required"


class RPCException(BaseCustomException):
    """Node call, contract read or transaction submission failed."""

    def get_default_message(self) -> str:
        return "error.rpc.failed"


class TransactionFailedException(RPCException):
    """Transaction was mined but reverted."""

    def get_default_message(self) -> str:
        return "error.transaction.reverted"


class ContractArtifactException(BaseCustomException):
    """Compiled contract artifact is missing or incomplete."""

    def get_default_message(self) -> str:
        return "error.contract.artifact_missing"
