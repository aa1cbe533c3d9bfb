from .file_stats import FileStatsRepository

__all__ = ["FileStatsRepository"]
