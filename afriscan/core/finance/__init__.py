from .feasibility import compute_financials, evaluate_feasibility

__all__ = ["evaluate_feasibility", "compute_financials"]
