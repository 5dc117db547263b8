class UnemployedListeningError(Exception):
    """Base class for every error raised by the pipeline."""


class ReferenceDataError(UnemployedListeningError):
    """The unemployment reference table is missing, unreadable or empty."""


class DataQualityError(UnemployedListeningError):
    """Input violates an assumption the analysis cannot repair, e.g. a genre
    reported twice for the same year."""


class PipelineError(UnemployedListeningError):
    def __init__(self, stage, cause):
        self.stage = stage
        self.cause = cause
        super().__init__(f"{stage} failed: {cause}")
