"""Shared pytest fixtures for the MineLib parser tests."""

import io
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

SAMPLE_PRECEDENCE_DATA = """\
% Sample precedence file
0 0
1 1 0
2 1 0
3 2 1 2
4 3 1 2 3
"""

SAMPLE_UPIT_DATA = """\
% Sample UPIT file
NAME: test_instance
TYPE: UPIT
NBLOCKS: 5
OBJECTIVE_FUNCTION:
0 -100.0
1 50.0
2 75.0
3 200.0
4 -25.0
EOF
"""

SAMPLE_CPIT_DATA = """\
% Sample CPIT file
NAME: test_cpit
TYPE: CPIT
NBLOCKS: 5
NPERIODS: 3
NRESOURCE SIDE CONSTRAINTS: 2
DISCOUNT RATE: 0.1
OBJECTIVE_FUNCTION:
0 -100.0
1 50.0
2 75.0
3 200.0
4 -25.0
RESOURCE CONSTRAINT LIMITS:
0 0 L 1000.0
0 1 L 1000.0
0 2 L 1000.0
1 0 I 0.0 500.0
1 1 I 0.0 500.0
1 2 I 0.0 500.0
RESOURCE CONSTRAINT COEFFICIENTS:
0 0 10.0
0 1 5.0
1 0 8.0
1 1 4.0
2 0 12.0
2 1 6.0
3 0 15.0
3 1 7.0
4 0 9.0
4 1 3.0
EOF
"""

SAMPLE_PCPSP_DATA = """\
% Sample PCPSP file
NAME: test_pcpsp
TYPE: PCPSP
NBLOCKS: 3
NPERIODS: 2
NDESTINATIONS: 2
NRESOURCE SIDE CONSTRAINTS: 1
NGENERAL SIDE CONSTRAINTS: 0
DISCOUNT RATE: 0.1
OBJECTIVE_FUNCTION:
0 -50.0 -100.0
1 100.0 25.0
2 150.0 50.0
RESOURCE CONSTRAINT LIMITS:
0 0 L 500.0
0 1 L 500.0
RESOURCE CONSTRAINT COEFFICIENTS:
0 0 0 10.0
0 1 0 10.0
1 0 0 15.0
1 1 0 15.0
2 0 0 20.0
2 1 0 20.0
EOF
"""

SAMPLE_BLOCK_MODEL_DATA = """\
% Sample block model
0 0 0 0 1000.0 0.5
1 1 0 0 1200.0 0.8
2 0 1 0 950.0 0.3
3 1 1 0 1100.0 1.2
4 0 0 1 1050.0 0.6
"""


@pytest.fixture
def precedence_stream():
    return io.StringIO(SAMPLE_PRECEDENCE_DATA)


@pytest.fixture
def upit_stream():
    return io.StringIO(SAMPLE_UPIT_DATA)


@pytest.fixture
def cpit_stream():
    return io.StringIO(SAMPLE_CPIT_DATA)


@pytest.fixture
def pcpsp_stream():
    return io.StringIO(SAMPLE_PCPSP_DATA)


@pytest.fixture
def block_model_stream():
    return io.StringIO(SAMPLE_BLOCK_MODEL_DATA)


@pytest.fixture
def examples_data_dir():
    """Directory holding the small sample instance shipped with the examples."""
    return PROJECT_ROOT / "examples" / "data"


@pytest.fixture
def instance_dir(tmp_path):
    """A directory of sample files sharing the ``mine`` stem, plus a lone PCPSP file."""
    (tmp_path / "mine.blocks").write_text(SAMPLE_BLOCK_MODEL_DATA, encoding="utf-8")
    (tmp_path / "mine.prec").write_text(SAMPLE_PRECEDENCE_DATA, encoding="utf-8")
    (tmp_path / "mine.upit").write_text(SAMPLE_UPIT_DATA, encoding="utf-8")
    (tmp_path / "mine.cpit").write_text(SAMPLE_CPIT_DATA, encoding="utf-8")
    (tmp_path / "other.pcpsp").write_text(SAMPLE_PCPSP_DATA, encoding="utf-8")
    return tmp_path
