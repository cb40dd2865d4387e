"""Exception types raised at the boundaries around the pricing core."""


class TourCalcError(Exception):
    """Base class for all TourCalc errors."""


class SnapshotRejectedError(TourCalcError):
    """A stored or imported snapshot failed validation and was not loaded."""

    def __init__(self, message: str, problems: list[str] | None = None) -> None:
        super().__init__(message)
        self.problems = problems or []


class HotelStayError(TourCalcError):
    """An explicit hotel stay edit could not be applied."""


class TripAlreadyCoveredError(HotelStayError):
    """Every night of the trip is already assigned to a hotel stay."""


class TripNotFoundError(TourCalcError):
    """No saved trip exists with the requested id."""


class AdvisoryGenerationError(TourCalcError):
    """The advisory text service did not produce a result."""

    def __init__(self, message: str = "generation failed") -> None:
        super().__init__(message)
