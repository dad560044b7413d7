"""Catalog exports"""

from .plans import DATA_PLANS, DataPlan, get_plan, list_plans

__all__ = ["DATA_PLANS", "DataPlan", "get_plan", "list_plans"]
