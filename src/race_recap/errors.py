"""Exceptions raised while turning a GPX document into a race recap."""


class ParseError(ValueError):
    """The GPX text could not be turned into a RouteDocument."""


class InvalidRootError(ParseError):
    """The document is not XML, or its top-level element is not <gpx>."""


class MalformedNumericError(ParseError):
    """One or more required coordinates were missing or not numbers.

    All offending fields are collected before raising so a single error
    reports every bad coordinate in the document.
    """

    def __init__(self, fields: list[str]):
        self.fields = tuple(fields)
        shown = ", ".join(self.fields[:10])
        if len(self.fields) > 10:
            shown += f", ... ({len(self.fields) - 10} more)"
        super().__init__(f"Invalid coordinate values: {shown}")


class SamplerError(ValueError):
    """Sampling a route into waypoint summaries failed."""


class InvalidSampleCountError(SamplerError):
    def __init__(self, sample_count):
        self.sample_count = sample_count
        super().__init__(f"Sample count must be an integer >= 2, got {sample_count!r}")


class RouteProcessingError(Exception):
    """Wraps any failure of the parse/sample pipeline for display."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"failed to process route: {cause}")
