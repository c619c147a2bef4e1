"""HTTP API exposing parsed FastQC reports."""
