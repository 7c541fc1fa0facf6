"""
Passenger manifest export: renders a trip's roster as a downloadable PDF.
"""

from .router import router
from .renderer import ManifestRenderer, manifest_filename

__all__ = ["router", "ManifestRenderer", "manifest_filename"]
