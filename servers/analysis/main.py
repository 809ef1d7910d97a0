"""Entry point for the Codesight Analysis Server."""

import sys
from pathlib import Path

# Add the source directory to the Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root / "src"))

from codesight.analysis_server.server import main

if __name__ == "__main__":
    main()
