"""Census recoding and LIME explanation walkthrough."""

__version__ = "0.1.0"
