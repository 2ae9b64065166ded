import sys
from pathlib import Path

import matplotlib

# Headless backend for chart rendering under pytest
matplotlib.use("Agg")

_project_root = Path(__file__).parent.parent
sys.path.insert(0, str(_project_root))
