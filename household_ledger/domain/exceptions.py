"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidRecordError(DomainException):
    """Raw ledger record failed validation at the ingestion boundary"""

    def __init__(self, record_type: str, message: str):
        super().__init__(f"Invalid {record_type} record: {message}")
        self.record_type = record_type


class InvalidPeriodError(DomainException):
    """Reporting period is malformed (month outside 1-12 or inverted range)"""

    pass
