from .generator import render_run_report, write_report

__all__ = ["render_run_report", "write_report"]
