"""Pytest configuration and fixtures for frameset tests."""

import logging
import sys
from pathlib import Path

import pytest

# Add project root to Python path BEFORE test collection
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from frameset.capture import save  # noqa: E402
from frameset.models import Box  # noqa: E402
from frameset.virtual_host import VirtualHost  # noqa: E402


WORKAREA = Box(left=0, top=0, width=1000, height=800)


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo logging setup done by the CLI or setup_logging tests."""
    logger = logging.getLogger("frameset")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def host():
    """In-memory host with two graphical displays, :0 selected."""
    return VirtualHost(displays=[":0", ":1"], current_display=":0", workarea=WORKAREA)


@pytest.fixture
def fresh_host():
    """Second, empty host to restore onto."""
    return VirtualHost(displays=[":0", ":1"], current_display=":0", workarea=WORKAREA)


@pytest.fixture
def frames(host):
    """A main frame with its own minibuffer and a minibufferless frame using it."""
    main = host.make_frame(":0", [
        ("left", 10), ("top", 20), ("width", 80), ("height", 40),
        ("font", "Mono-10"), ("foreground-color", "black"),
    ])
    child = host.make_frame(":0", [
        ("left", 300), ("top", 100), ("width", 60), ("height", 30),
        ("minibuffer", False),
    ])
    host.window_state_put(main, {"buffers": ["*scratch*"]})
    host.window_state_put(child, {"buffers": ["notes.txt"]})
    return main, child


@pytest.fixture
def frameset(host, frames):
    """Frameset captured from the two fixture frames."""
    return save(host, app="desktop", name="work", description="Two frames")


@pytest.fixture
def storage_dir(tmp_path):
    """Temporary frameset storage directory."""
    return tmp_path / "framesets"
