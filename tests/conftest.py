"""Test configuration and fixtures."""
from datetime import datetime, UTC

import pytest

from app import create_app
from panelcam.gcode_generator import PanelGCodeGenerator
from panelcam.machine import MachineProfile
from panelcam.models import PanelInfo, Tool, ToolKind


class TestConfig:
    """Test configuration."""
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    API_KEY = None  # Disable the API key check for tests
    LOG_LEVEL = 'WARNING'
    MACHINE_DIALECT = 'generic'
    MACHINE_SAFE_HEIGHT = 10
    MACHINE_SPINDLE_SPEED = 18000
    MACHINE_FEED_RATE = 800
    MACHINE_PLUNGE_RATE = 300
    MACHINE_USE_TOOL_COMPENSATION = 'false'
    MACHINE_USE_TOOL_RATES = 'true'


FIXED_TIME = datetime(2024, 1, 15, 8, 30, tzinfo=UTC)


@pytest.fixture
def app():
    """Create and configure a test application instance."""
    app = create_app(TestConfig)
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    """Create a test client."""
    return app.test_client()


@pytest.fixture
def profile():
    """Generic profile with the editor's defaults."""
    return MachineProfile()


@pytest.fixture
def compensated_profile():
    """Generic profile with tool compensation enabled."""
    return MachineProfile(use_tool_compensation=True)


@pytest.fixture
def drill_bit():
    """5 mm drill bit without its own plunge rate."""
    return Tool(id='drill_5mm', name='Drill 5mm', kind=ToolKind.DRILL_BIT,
                diameter=5, spindle_speed=18000, feed_rate=900)


@pytest.fixture
def end_mill():
    """6 mm straight bit."""
    return Tool(id='mill_6mm', name='Straight bit 6mm', kind=ToolKind.MILLING_BIT,
                diameter=6, spindle_speed=16000, feed_rate=800, plunge_rate=250, max_depth=20)


@pytest.fixture
def tools(drill_bit, end_mill):
    return [drill_bit, end_mill]


@pytest.fixture
def panel():
    """Typical 18 mm plywood side panel."""
    return PanelInfo(name='Side panel', length=800, width=400, thickness=18, material='Plywood')


@pytest.fixture
def generator(profile):
    """Generator with a frozen clock so output is reproducible."""
    return PanelGCodeGenerator(profile, clock=lambda: FIXED_TIME)


@pytest.fixture
def square_path():
    return ((0.0, 0.0), (100.0, 0.0), (100.0, 100.0), (0.0, 100.0))


@pytest.fixture
def job_payload():
    """Editor payload with one operation of each kind."""
    return {
        'panel': {
            'name': 'Cabinet side',
            'dimensions': {'length': 800, 'width': 400, 'thickness': 18},
            'material': 'Plywood'
        },
        'operations': [
            {'type': 'drill', 'tool': 'drill_5mm', 'x': 100, 'y': 100,
             'diameter': 5, 'depth': 10},
            {'type': 'contour', 'tool': 'mill_6mm', 'depth': 18, 'closed': True,
             'multi_pass': True, 'pass_depth': 6,
             'path': [[0, 0], [200, 0], [200, 100], [0, 100]]},
            {'type': 'closed_pocket', 'tool': 'mill_6mm', 'depth': 8, 'strategy': 'zigzag',
             'path': [{'x': 50, 'y': 50}, {'x': 80, 'y': 50}, {'x': 80, 'y': 80}]},
            {'type': 'open_pocket', 'tool': 'mill_6mm', 'depth': 5, 'width': 20,
             'strategy': 'parallel', 'path': [[0, 200], [300, 200]]}
        ],
        'tools': [
            {'id': 'drill_5mm', 'name': 'Drill 5mm', 'kind': 'drill_bit', 'diameter': 5,
             'spindle_speed': 18000, 'feed_rate': 900},
            {'id': 'mill_6mm', 'name': 'Straight bit 6mm', 'kind': 'milling_bit', 'diameter': 6,
             'spindle_speed': 16000, 'feed_rate': 800, 'plunge_rate': 300, 'max_depth': 20}
        ]
    }
