"""Reading and writing floor plan snapshots."""

from .parser import load_plan, plan_from_dict, plan_to_dict, save_plan

__all__ = ["load_plan", "save_plan", "plan_from_dict", "plan_to_dict"]
