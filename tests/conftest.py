import pytest
from pathlib import Path

from tspkit.parsers import parse_text

# Define project root for path fixtures
repo_root = Path(__file__).resolve().parent.parent
assets_dir = repo_root / "tests" / "_assets" / "tsplib"


@pytest.fixture(scope="session")
def tsplib_dir():
    """Directory holding the small TSPLIB files used across tests"""
    return assets_dir


@pytest.fixture(scope="session")
def square_tsp_path():
    """EUC_2D rectangle with sides 3 and 4"""
    return assets_dir / "square4.tsp"


@pytest.fixture(scope="session")
def explicit_tsp_path():
    """EXPLICIT LOWER_DIAG_ROW instance with TWOD_DISPLAY data"""
    return assets_dir / "explicit4.tsp"


@pytest.fixture(scope="session")
def atsp_path():
    return assets_dir / "asym3.atsp"


@pytest.fixture(scope="session")
def hcp_edge_list_path():
    return assets_dir / "cycle5.hcp"


@pytest.fixture(scope="session")
def hcp_adj_list_path():
    return assets_dir / "adj4.hcp"


@pytest.fixture(scope="session")
def tour_path():
    return assets_dir / "square4.opt.tour"


@pytest.fixture(scope="session")
def cvrp_path():
    return assets_dir / "small5.vrp"


@pytest.fixture(scope="session")
def sop_path():
    return assets_dir / "small4.sop"


@pytest.fixture(scope="session")
def geo_path():
    """First three cities of burma14"""
    return assets_dir / "burma3.tsp"


@pytest.fixture
def parse():
    """Parse an inline TSPLIB snippet given line by line"""
    def _parse(*lines, name=None):
        return parse_text("\n".join(lines) + "\n", name=name)
    return _parse


@pytest.fixture(autouse=True)
def run_from_repo_root(monkeypatch):
    """Run every test from the project root so relative config paths resolve"""
    monkeypatch.chdir(repo_root)
