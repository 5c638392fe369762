"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and global constants.

Why is this file needed?
------------------------
1. Abstraction: It keeps the discovery parameters (maximum arity, comparison
   tolerance) and the database metadata in one place instead of scattering
   literals through the engine.
2. Deployment: It resolves the default output location relative to the
   project root, or to the PyInstaller bundle (sys._MEIPASS) when frozen.

Exports:
    DEFAULT_MAX_ARITY (int): Largest parameter count tried per operation.
    EQUALITY_TOLERANCE (float): Absolute tolerance for result comparison.
    DATABASE_VERSION (str): Version written into every database.
    DATABASE_SOURCE (str): Source descriptor written into every database.
    DATA_PATH (str): Absolute path to the data directory.
    DEFAULT_DATABASE_PATH (str): Default output file of a discovery run.
"""
import sys
import os
from pathlib import Path


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # config.py is in src/equationdiscovery/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


# Discovery
DEFAULT_MAX_ARITY: int = 3
EQUALITY_TOLERANCE: float = 1e-4

# Database metadata
DATABASE_VERSION: str = "1.0.0"
DATABASE_SOURCE: str = "Runtime AB testing"

# Paths
DATA_PATH: str = get_resource_path("data")
DEFAULT_DATABASE_PATH: str = os.path.join(DATA_PATH, "equationDatabase.json")
