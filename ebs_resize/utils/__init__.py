"""Utils package."""

from ebs_resize.utils.logger import setup_logging, get_logger
from ebs_resize.utils.progress import ProgressTracker, SimpleProgressTracker, create_progress_tracker

__all__ = [
    'setup_logging',
    'get_logger',
    'ProgressTracker',
    'SimpleProgressTracker',
    'create_progress_tracker'
]
