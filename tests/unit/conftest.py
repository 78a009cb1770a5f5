import sys
from pathlib import Path

# Add repository root to Python path so `src` and `tests` import as packages
root_path = str(Path(__file__).parent.parent.parent)
if root_path not in sys.path:
    sys.path.append(root_path)
