"""Put the in-repo python/ directory on sys.path so cmatrix imports uninstalled."""
import sys
from pathlib import Path

_python_dir = Path(__file__).resolve().parent / "python"
if _python_dir.is_dir():
    path_str = str(_python_dir)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)
