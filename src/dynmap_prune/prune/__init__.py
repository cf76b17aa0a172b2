__all__ = ["marker_filter", "pruner", "report"]
