import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest

from review_grid.schemas.columns import DisplayColumn, FilterableColumn


class Recorder:
    """Collects every payload a callback receives."""

    def __init__(self):
        self.calls = []

    def __call__(self, payload):
        self.calls.append(payload)

    @property
    def last(self):
        return self.calls[-1]


@pytest.fixture
def recorder():
    return Recorder


@pytest.fixture
def columns():
    return [
        FilterableColumn(
            id="status", header="Status", type="selection", values=["open", "closed"]
        ),
        FilterableColumn(
            id="owner", header="Owner", type="text", values=["alice", "bob", "carol"]
        ),
        FilterableColumn(id="file", header="File name", type="file", values=["a.pdf", "b.docx"]),
        FilterableColumn(id="signed", header="Signed on", type="date"),
    ]


@pytest.fixture
def display_columns():
    return [
        DisplayColumn(id="name", header="Name", visible=True, fixed=True),
        DisplayColumn(id="date", header="Date", visible=True),
        DisplayColumn(id="size", header="Size", visible=False),
        DisplayColumn(id="owner", header="Owner", visible=True),
    ]
