# src/labourmap/errors.py


class LabourMapError(Exception):
    """Base class for errors the CLI reports as a plain message."""


class SourceLoadError(LabourMapError):
    """The dataset CSV or the atlas JSON could not be loaded. Fatal at startup."""
