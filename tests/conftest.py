import sys
from pathlib import Path
from typing import Dict

import pytest


def setup_path():
    project_root = Path(__file__).resolve().parent.parent
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))


setup_path()


def write_files(root: Path, files: Dict[str, str]) -> Path:
    for relative, content in files.items():
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding='utf-8')
    return root


@pytest.fixture
def site_dir(tmp_path):
    """An empty site with a minimal configuration and pages directory."""
    site = tmp_path / 'site'
    write_files(site, {'site-config.yaml': 'site_metadata:\n  title: Test Site\nplugins: []\n'})
    (site / 'src' / 'pages').mkdir(parents=True)
    return site.resolve()


@pytest.fixture
def make_files():
    return write_files
