"""ngsreports - typed parsing of FastQC quality-control reports."""

__version__ = "0.1.0"
