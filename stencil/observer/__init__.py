from .observable import DEFAULT_PRIORITY, DispatchResult, Observable

__all__ = ["DEFAULT_PRIORITY", "DispatchResult", "Observable"]
