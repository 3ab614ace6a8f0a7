from .normalize import bars_from_frame, bars_from_matrix, bars_from_records

__all__ = ["bars_from_frame", "bars_from_matrix", "bars_from_records"]
