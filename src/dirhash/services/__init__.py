from .report_service import ReportService
from .stat_service import StatCollector
from .walk_service import TreeWalker, WalkReport


__all__ = [
    'ReportService',
    'StatCollector',
    'TreeWalker',
    'WalkReport',
]
