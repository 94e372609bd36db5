"""
Admission module for the search service.

Gates the ranking pipeline behind a time-windowed cache of verified
(credential, origin) pairs.
"""

from .cache import AdmissionCache
from .contracts import AdmissionConfig, AdmissionRecord, AdmissionStats

__all__ = ["AdmissionCache", "AdmissionConfig", "AdmissionRecord", "AdmissionStats"]
