"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class StorageUnavailableError(DomainException):
    """Payment store could not be reached or failed mid-query"""

    pass


class PaymentNotFoundError(DomainException):
    """No payment exists with the requested identifier"""

    def __init__(self, payment_id):
        super().__init__(f"Payment {payment_id} not found")
        self.payment_id = payment_id


class InvalidStatsPeriodError(DomainException):
    """Stats period end is not after its start"""

    pass
