"""Validation errors raised while turning user text into snapshots.

Every error aborts the whole operation: a parse either returns the complete
record list or raises one of these, and nothing is persisted.
"""


class SnapshotImportError(ValueError):
    """Base class for import failures."""


class EmptyInputError(SnapshotImportError):
    """The supplied text has no non-blank lines."""

    def __init__(self) -> None:
        super().__init__("The file or pasted text is empty")


class MissingColumnsError(SnapshotImportError):
    """A header row was found but a required column could not be matched."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Missing required columns: {', '.join(missing)}")


class InvalidMonthLineError(SnapshotImportError):
    """A row's month could not be resolved to YYYY-MM."""

    def __init__(self, line: int) -> None:
        self.line = line
        super().__init__(f"Invalid month on line {line}")


class InvalidValuesLineError(SnapshotImportError):
    """One of a row's amount cells is not a number."""

    def __init__(self, line: int) -> None:
        self.line = line
        super().__init__(f"Invalid values on line {line}")


class NoRowsImportError(SnapshotImportError):
    """Parsing finished without producing any record."""

    def __init__(self) -> None:
        super().__init__("No rows to import")


class AmbiguousSingleRowImportError(SnapshotImportError):
    """Several rows were given for one month and no month column tells them apart."""

    def __init__(self) -> None:
        super().__init__("Month import needs a single row, or a month column to pick the row")


class MonthMismatchError(SnapshotImportError):
    """A single-month import row belongs to another month."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Row is for {actual}, expected {expected}")


class SingleRowRequiredError(SnapshotImportError):
    """A single-month import did not resolve to exactly one record."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"Month import requires exactly one row, got {count}")


class InvalidEntryError(ValueError):
    """Base class for manual entry failures."""


class InvalidIncomeError(InvalidEntryError):
    def __init__(self) -> None:
        super().__init__("Income must be a number greater than or equal to 0")


class InvalidExpenseError(InvalidEntryError):
    def __init__(self) -> None:
        super().__init__("Expense must be a number greater than or equal to 0")


class InvalidBalanceError(InvalidEntryError):
    def __init__(self) -> None:
        super().__init__("Balance must be a number")
