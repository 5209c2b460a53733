from .attrs import RecordAttrs

__all__ = ["RecordAttrs"]
