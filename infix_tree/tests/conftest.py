import sys
from pathlib import Path

import pytest

# Ensure the directory that contains the 'infix_tree' folder is on sys.path
# so imports like 'infix_tree.parser' work when pytest runs from a checkout
tests_dir = Path(__file__).resolve().parent
project_dir = tests_dir.parent
project_parent = project_dir.parent
if str(project_parent) not in sys.path:
    sys.path.insert(0, str(project_parent))


@pytest.fixture
def rules_file(tmp_path):
    path = tmp_path / 'rules.yaml'
    path.write_text('operators:\n  - "+"\n  - "-"\n  - "*"\n', encoding='utf-8')
    return path
