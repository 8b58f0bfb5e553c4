from .dashboard_service import DashboardService, ViewModelAssembler, assemble

__all__ = ["DashboardService", "ViewModelAssembler", "assemble"]
