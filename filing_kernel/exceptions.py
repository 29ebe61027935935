"""
Typed Exception Hierarchy for the Filing Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers of the ledger branch on *which* precondition failed: retry after the
owner unpauses, correct the arguments, or wait for a future season.  Parsing
messages for that is fragile, so every error kind is:

  1. A TYPED exception class (catch by type, not message)
  2. Carrying a symbolic CODE class attribute (API-safe)
  3. Carrying a stable numeric ERROR_CODE (wire-compatible with the
     existing client tooling)
  4. Carrying structured DATA as attributes

Registry operations do not raise these for validation failures.  The
operation boundary converts them into ``OperationResult.failure(error)``;
``OperationResult.unwrap()`` re-raises the typed error for callers that
prefer exceptions.

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    FilingKernelError (base)
    |
    +-- AccessError
    |   +-- NotAuthorizedError
    |   +-- ContractPausedError      (season registry pause)
    |   +-- PausedError              (filing registry pause)
    |
    +-- SeasonError
    |   +-- YearExistsError
    |   +-- YearNotFoundError
    |   +-- InvalidDatesError
    |   +-- SeasonClosedError
    |   +-- SeasonNotOpenError
    |
    +-- FilingError
    |   +-- FilingExistsError
    |   +-- FilingNotFoundError
    |   +-- InvalidContentHashError
    |   +-- InvalidTaxYearError
    |   +-- InvalidTransitionError
    |   +-- TooManyDeductionsError
    |
    +-- InitializationError
    |   +-- NotInitializedError
    |   +-- AlreadyInitializedError
    |
    +-- StorageError
        +-- RegistryStateNotFoundError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Registry | Code                  | Num | When Raised
---------|-----------------------|-----|--------------------------------------
Both     | NOT_AUTHORIZED        | 100 | Caller lacks the required role
Season   | YEAR_EXISTS           | 101 | Season already defined for the year
         | YEAR_NOT_FOUND        | 102 | No season for the year
         | INVALID_DATES         | 103 | Window or year rule violated
         | SEASON_CLOSED         | 104 | close_season on a closed season
         | SEASON_NOT_OPEN       | 105 | open_season on an open season
         | CONTRACT_PAUSED       | 107 | Season registry is paused
Filing   | FILING_EXISTS         | 102 | Taxpayer already filed for the year
         | FILING_NOT_FOUND      | 103 | Filing id doesn't exist
         | INVALID_CONTENT_HASH  | 104 | Hash fails length/prefix contract
         | INVALID_TAX_YEAR      | 105 | Tax year not after 2020
         | INVALID_TRANSITION    | 107 | Status change not in the lifecycle
         | TOO_MANY_DEDUCTIONS   | 110 | More than 20 deduction ids
         | NOT_INITIALIZED       | 113 | Role principals not configured
         | PAUSED                | 114 | Filing registry is paused
         | ALREADY_INITIALIZED   | 115 | Role principals already configured
Storage  | REGISTRY_STATE_NOT_FOUND | - | No persisted row for a registry

Numeric codes are scoped per registry: 102 means YEAR_NOT_FOUND on the
season registry and FILING_EXISTS on the filing registry.  Use ``code`` when
a registry-independent identifier is needed.
"""

from __future__ import annotations


class FilingKernelError(Exception):
    """
    Base exception for all filing kernel errors.

    All subclasses carry a ``code`` class attribute for machine-readable
    identification and an ``error_code`` with the stable numeric value.
    """

    code: str = "FILING_KERNEL_ERROR"
    error_code: int = 0


# Access control exceptions


class AccessError(FilingKernelError):
    """Base exception for pause and authorization failures."""

    code: str = "ACCESS_ERROR"


class NotAuthorizedError(AccessError):
    """Caller does not hold the role required by the operation."""

    code: str = "NOT_AUTHORIZED"
    error_code: int = 100

    def __init__(self, caller: str, required_role: str):
        self.caller = caller
        self.required_role = required_role
        super().__init__(f"Caller {caller} is not {required_role}")


class ContractPausedError(AccessError):
    """Season registry is paused; state-mutating operations are blocked."""

    code: str = "CONTRACT_PAUSED"
    error_code: int = 107

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Season registry is paused: {operation} rejected")


class PausedError(AccessError):
    """Filing registry is paused; state-mutating operations are blocked."""

    code: str = "PAUSED"
    error_code: int = 114

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Filing registry is paused: {operation} rejected")


# Season exceptions


class SeasonError(FilingKernelError):
    """Base exception for tax season errors."""

    code: str = "SEASON_ERROR"


class YearExistsError(SeasonError):
    code: str = "YEAR_EXISTS"
    error_code: int = 101

    def __init__(self, tax_year: int):
        self.tax_year = tax_year
        super().__init__(f"Season already defined for tax year {tax_year}")


class YearNotFoundError(SeasonError):
    code: str = "YEAR_NOT_FOUND"
    error_code: int = 102

    def __init__(self, tax_year: int):
        self.tax_year = tax_year
        super().__init__(f"No season defined for tax year {tax_year}")


class InvalidDatesError(SeasonError):
    """
    Season window or year violates the window rule.

    ``reason`` names the first rule that failed: ``tax_year``, ``order``,
    ``not_future`` or ``span``.
    """

    code: str = "INVALID_DATES"
    error_code: int = 103

    def __init__(
        self,
        tax_year: int,
        start_block: int,
        end_block: int,
        reason: str,
    ):
        self.tax_year = tax_year
        self.start_block = start_block
        self.end_block = end_block
        self.reason = reason
        super().__init__(
            f"Invalid season window for {tax_year}: "
            f"[{start_block}, {end_block}] ({reason})"
        )


class SeasonClosedError(SeasonError):
    """close_season called on a season that is already closed."""

    code: str = "SEASON_CLOSED"
    error_code: int = 104

    def __init__(self, tax_year: int):
        self.tax_year = tax_year
        super().__init__(f"Season {tax_year} is already closed")


class SeasonNotOpenError(SeasonError):
    """
    open_season called on a season that is already open.

    The name is kept for wire compatibility with the existing error table.
    """

    code: str = "SEASON_NOT_OPEN"
    error_code: int = 105

    def __init__(self, tax_year: int):
        self.tax_year = tax_year
        super().__init__(f"Season {tax_year} is already open")


# Filing exceptions


class FilingError(FilingKernelError):
    """Base exception for filing errors."""

    code: str = "FILING_ERROR"


class FilingExistsError(FilingError):
    code: str = "FILING_EXISTS"
    error_code: int = 102

    def __init__(self, taxpayer: str, tax_year: int, filing_id: int):
        self.taxpayer = taxpayer
        self.tax_year = tax_year
        self.filing_id = filing_id
        super().__init__(
            f"Taxpayer {taxpayer} already filed for {tax_year} "
            f"(filing {filing_id})"
        )


class FilingNotFoundError(FilingError):
    code: str = "FILING_NOT_FOUND"
    error_code: int = 103

    def __init__(self, filing_id: int):
        self.filing_id = filing_id
        super().__init__(f"Filing not found: {filing_id}")


class InvalidContentHashError(FilingError):
    code: str = "INVALID_CONTENT_HASH"
    error_code: int = 104

    def __init__(self, content_hash: str, expected_length: int, expected_prefix: str):
        self.content_hash = content_hash
        self.expected_length = expected_length
        self.expected_prefix = expected_prefix
        super().__init__(
            f"Content hash must be {expected_length} characters starting "
            f"with {expected_prefix!r}, got {len(content_hash)} characters"
        )


class InvalidTaxYearError(FilingError):
    code: str = "INVALID_TAX_YEAR"
    error_code: int = 105

    def __init__(self, tax_year: int, min_tax_year: int):
        self.tax_year = tax_year
        self.min_tax_year = min_tax_year
        super().__init__(f"Tax year {tax_year} must be after {min_tax_year}")


class InvalidTransitionError(FilingError):
    """Requested status change is not an edge of the filing lifecycle."""

    code: str = "INVALID_TRANSITION"
    error_code: int = 107

    def __init__(self, filing_id: int, from_status: str, to_status: str):
        self.filing_id = filing_id
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Filing {filing_id} cannot move from {from_status} to {to_status}"
        )


class TooManyDeductionsError(FilingError):
    code: str = "TOO_MANY_DEDUCTIONS"
    error_code: int = 110

    def __init__(self, count: int, max_deductions: int):
        self.count = count
        self.max_deductions = max_deductions
        super().__init__(
            f"{count} deduction ids exceed the limit of {max_deductions}"
        )


# Initialization exceptions


class InitializationError(FilingKernelError):
    """Base exception for role principal configuration errors."""

    code: str = "INITIALIZATION_ERROR"


class NotInitializedError(InitializationError):
    code: str = "NOT_INITIALIZED"
    error_code: int = 113

    def __init__(self):
        super().__init__("Deadline and audit authorities are not configured")


class AlreadyInitializedError(InitializationError):
    code: str = "ALREADY_INITIALIZED"
    error_code: int = 115

    def __init__(self, deadline_authority: str, audit_authority: str):
        self.deadline_authority = deadline_authority
        self.audit_authority = audit_authority
        super().__init__(
            f"Role principals already configured "
            f"(deadline={deadline_authority}, audit={audit_authority})"
        )


# Storage exceptions


class StorageError(FilingKernelError):
    """Base exception for persistence errors (outside the operation taxonomy)."""

    code: str = "STORAGE_ERROR"


class RegistryStateNotFoundError(StorageError):
    code: str = "REGISTRY_STATE_NOT_FOUND"

    def __init__(self, registry: str):
        self.registry = registry
        super().__init__(f"No persisted state for registry: {registry}")
