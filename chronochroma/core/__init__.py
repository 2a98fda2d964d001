from .observable import Observable, ObservedProperty, UpdateSource

__all__ = ["Observable", "ObservedProperty", "UpdateSource"]
