"""Conference system storage: texts, read-marks, surveys, users and survey reports."""

__version__ = "0.1.0"