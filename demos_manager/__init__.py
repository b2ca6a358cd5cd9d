"""
demos-manager: keeps a local cache of imported demos in step with the
installed release and manages the folders scanned for new demos.
"""

__version__ = "2.3.0"
