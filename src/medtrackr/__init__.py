"""
MedTrackr: study and clinical routine planner for medical students and workers

Account onboarding engine plus a terminal front end.
"""

try:
    from importlib.metadata import version
    __version__ = version("medtrackr")
except Exception:
    __version__ = "0.0.0"  # Fallback for development

__all__ = ["__version__"]
