"""Static upgrade analysis for SharePoint Framework projects."""

__version__ = "0.1.0"
