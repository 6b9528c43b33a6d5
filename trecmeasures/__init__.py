"""Per-topic ranked retrieval evaluation measures and z-score reference file reading."""

__version__ = "0.1.0"