"""
Shared pytest fixtures for SEO optimizer tests.
"""

import pytest
import sys
import importlib.util
from pathlib import Path

# Project root for finding Cloud Function modules
PROJECT_ROOT = Path(__file__).parent.parent


def _load_module_from_path(module_name: str, file_path: Path):
    """Load a module from a specific file path."""
    spec = importlib.util.spec_from_file_location(module_name, file_path)
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


# Load the Cloud Function module with a unique name at module load time
_seo_optimizer_module = _load_module_from_path(
    'seo_optimizer_main',
    PROJECT_ROOT / 'seo-optimizer' / 'main.py'
)


# ============================================================================
# SEO Optimizer Function Fixtures
# ============================================================================

@pytest.fixture
def seo_module():
    """Returns the loaded seo-optimizer module (for patching)."""
    return _seo_optimizer_module


@pytest.fixture
def fetch_document():
    """Returns fetch_document function from seo-optimizer."""
    return _seo_optimizer_module.fetch_document


@pytest.fixture
def extract_initial_data():
    """Returns extract_initial_data function from seo-optimizer."""
    return _seo_optimizer_module.extract_initial_data


@pytest.fixture
def build_channel_profile():
    """Returns build_channel_profile function from seo-optimizer."""
    return _seo_optimizer_module.build_channel_profile


@pytest.fixture
def aggregate_channels():
    """Returns aggregate_channels function from seo-optimizer."""
    return _seo_optimizer_module.aggregate_channels


@pytest.fixture
def analyze_target_video():
    """Returns analyze_target_video function from seo-optimizer."""
    return _seo_optimizer_module.analyze_target_video


@pytest.fixture
def generate_completion():
    """Returns generate_completion function from seo-optimizer."""
    return _seo_optimizer_module.generate_completion


@pytest.fixture
def parse_request_fields():
    """Returns parse_request_fields function from seo-optimizer."""
    return _seo_optimizer_module.parse_request_fields


@pytest.fixture
def optimize_seo():
    """Returns main entry point from seo-optimizer."""
    return _seo_optimizer_module.optimize_seo


# ============================================================================
# Page Fixtures
# ============================================================================

@pytest.fixture
def sample_channel_html():
    """Channel page with ytInitialData-style script blobs."""
    return """
    <html>
    <head><title>Cooking Channel - YouTube</title></head>
    <body>
    <script>
    var ytInitialData = {"header": {"title": "Cooking Channel"}, "tabs": [{"label": "Videos {all}"}]};
    </script>
    <script>
    {"title": {"runs": [{"text": "Easy Pasta Recipe in 10 Minutes"}]},
     "title": {"runs": [{"text": "@cookingchannel"}]},
     "title": {"runs": [{"text": "Short"}]},
     "title": {"runs": [{"text": "Easy Pasta Recipe in 10 Minutes"}]},
     "title": {"runs": [{"text": "Best Homemade Pizza Dough"}]},
     "ariaLabel": "Quick Breakfast Ideas by Cooking Channel 3 days ago",
     "ariaLabel": "Subscribe",
     "description": {"simpleText": "Learn to cook pasta fast with simple ingredients #pasta"},
     "description": {"simpleText": "Too short"},
     "description": {"simpleText": "The best pizza dough you will ever make #pizza #baking"}}
    </script>
    <p>#cooking #recipes #pasta #طبخ</p>
    </body>
    </html>
    """


@pytest.fixture
def sample_video_html():
    """Video watch page with title, meta description and keywords."""
    return """
    <!DOCTYPE html>
    <html>
    <head>
        <title>Foo Bar - YouTube</title>
        <meta name="description" content="A video about foo and bar.">
        <meta name="keywords" content="foo, bar, foo bar tutorial, ">
    </head>
    <body>
        <p>Watch more #foo #bar #tutorial</p>
    </body>
    </html>
    """


@pytest.fixture
def valid_model_text():
    """Model answer with commentary around the JSON payload."""
    return 'Sure! {"title":"T","description":"D","tags":["a","b"]} Hope this helps!'


@pytest.fixture
def mock_flask_request():
    """Factory for creating mock Flask request objects."""
    class MockRequest:
        def __init__(self, json_data=None, method='POST'):
            self._json = json_data
            self.method = method
            self.data = b''

        def get_json(self, force=False, silent=False):
            return self._json

    return MockRequest
