from .loader import DEFAULT_REFERENCE_PATH, ReferenceData, ReferenceDataLoader

__all__ = ["DEFAULT_REFERENCE_PATH", "ReferenceData", "ReferenceDataLoader"]
