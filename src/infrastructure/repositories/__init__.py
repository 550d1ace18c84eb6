from .progress import ProgressRepository

__all__ = ["ProgressRepository"]
