from .device_storage import DeviceStorage, current_device_id, get_device_storage
from .progress_tracker import ProgressTracker, get_progress_tracker

__all__ = [
    'DeviceStorage',
    'ProgressTracker',
    'current_device_id',
    'get_device_storage',
    'get_progress_tracker',
]
