import os
import sys
from pathlib import Path

# pygame must never try to open a real window or audio device under pytest.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

# Allow running the suite from a plain checkout as well as an editable install.
SRC = Path(__file__).parent / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def pytest_report_header(config):
    """Show the SDL drivers in the header so headless runs are obvious."""
    return f"SDL_VIDEODRIVER={os.environ.get('SDL_VIDEODRIVER')} SDL_AUDIODRIVER={os.environ.get('SDL_AUDIODRIVER')}"
