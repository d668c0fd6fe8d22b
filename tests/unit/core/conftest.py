"""Shared fixtures for core unit tests"""

import pytest


OLD_SRC = """\
fn main() {
    let x = 1;
    println!("x = {}", x);
}
"""

NEW_SRC = """\
fn main() {
    let   x = 2;
    println!( "x = {}", x);
    println!("done");
}
"""

CONFLICT_TEXT = "before\n<<<<<<< HEAD\nours\n=======\ntheirs\n>>>>>>> branch\nafter\n"

BASE_CONFLICT_TEXT = (
    "before\n<<<<<<< ours\none\n||||||| base\nbase line\n=======\ntwo\n>>>>>>> theirs\nafter\n"
)

NESTED_CONFLICT_TEXT = (
    "before\n"
    "<<<<<<< HEAD\nouter ours\n"
    "<<<<<<< HEAD\ninner ours\n=======\ninner theirs\n>>>>>>> inner\n"
    "=======\nouter theirs\n>>>>>>> outer\n"
    "after\n"
)


def _numbered(count: int, changed: dict[int, str] = None) -> str:
    """'line 1'..'line N', one per line; `changed` maps 0-based index -> replacement."""
    changed = changed or {}
    return "".join(f"{changed.get(i, f'line {i + 1}')}\n" for i in range(count))


@pytest.fixture(name="demo_texts")
def demo_texts_fixture():
    return OLD_SRC, NEW_SRC


@pytest.fixture(name="numbered")
def numbered_fixture():
    return _numbered


@pytest.fixture(name="conflict_text")
def conflict_text_fixture():
    return CONFLICT_TEXT


@pytest.fixture(name="base_conflict_text")
def base_conflict_text_fixture():
    return BASE_CONFLICT_TEXT


@pytest.fixture(name="nested_conflict_text")
def nested_conflict_text_fixture():
    return NESTED_CONFLICT_TEXT
