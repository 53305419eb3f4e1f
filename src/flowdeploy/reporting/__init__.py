"""
flowdeploy Reporting

Terminal summaries and JSON summaries of deployment runs.
"""

from .summary import Reporter, build_summary

__all__ = ["Reporter", "build_summary"]
