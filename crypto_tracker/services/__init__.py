"""Service modules"""
from .scheduler import FetchScheduler
from .controller import DashboardController
from .dashboard import Dashboard

__all__ = ["FetchScheduler", "DashboardController", "Dashboard"]
