from .exports import export_report

__all__ = ["export_report"]
