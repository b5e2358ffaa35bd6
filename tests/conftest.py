"""Shared pytest fixtures."""

import pytest

CLOTHING_CSV = """id,label,parent,leaf
Clothing,Clothing,,
Men's,Men's,Clothing,
Women's,Women's,Clothing,
Suits,Suits,Men's,
Slacks,Slacks,Suits,
Jackets,Jackets,Suits,
Dresses,Dresses,Women's,
Skirts,Skirts,Women's,
Blouses,Blouses,Women's,
Evening Gowns,Evening Gowns,Dresses,
Sun Dresses,Sun Dresses,Dresses,
"""

SHARED_BRANCH_CSV = """id,label,parent,leaf
1,Root,,
2,Left,1,
3,Right,1,
X,Shared,2,
X,Shared,3,
x1,Item,X,true
"""


@pytest.fixture
def clothing_nodes():
    """The Wikipedia nested set example, in input order."""
    from tests.helpers import make_nodes

    return make_nodes(
        ("Clothing", None),
        ("Men's", "Clothing"),
        ("Women's", "Clothing"),
        ("Suits", "Men's"),
        ("Slacks", "Suits"),
        ("Jackets", "Suits"),
        ("Dresses", "Women's"),
        ("Skirts", "Women's"),
        ("Blouses", "Women's"),
        ("Evening Gowns", "Dresses"),
        ("Sun Dresses", "Dresses"),
    )


@pytest.fixture
def shared_branch_nodes():
    """DAG where branch X is listed under both 2 and 3."""
    from tests.helpers import make_nodes

    return make_nodes(
        ("1", None),
        ("2", "1"),
        ("3", "1"),
        ("X", "2"),
        ("X", "3"),
        ("x1", "X", True),
    )


@pytest.fixture
def isolated_cwd(tmp_path, monkeypatch):
    """Run in an empty directory with no NESTEDSET_* environment."""
    import os

    for name in list(os.environ):
        if name.startswith("NESTEDSET_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def clothing_csv(isolated_cwd):
    path = isolated_cwd / "clothing.csv"
    path.write_text(CLOTHING_CSV, encoding="utf-8")
    return path


@pytest.fixture
def shared_branch_csv(isolated_cwd):
    path = isolated_cwd / "shared.csv"
    path.write_text(SHARED_BRANCH_CSV, encoding="utf-8")
    return path
