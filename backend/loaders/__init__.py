"""
Loaders Module - Resume file loading and checks.
"""

from .resume_loader import (
    load_resume,
    load_resume_bytes,
    ResumeFile,
    ResumeLoadError
)

__all__ = [
    'load_resume',
    'load_resume_bytes',
    'ResumeFile',
    'ResumeLoadError',
]
