import sys

import pytest
from PyQt5.QtCore import QCoreApplication

from inkmark.core.annotations import AnnotationModel, FilteredAnnotationView
from inkmark.core.bookmarks import BookmarkList, ViewportTracker


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    yield app


@pytest.fixture
def model():
    return AnnotationModel()


@pytest.fixture
def bookmarks():
    return BookmarkList()


@pytest.fixture
def tracker(bookmarks):
    return ViewportTracker(bookmarks, default_label="Untitled")


@pytest.fixture
def view(model):
    return FilteredAnnotationView(model)


class Recorder:
    """Collects signal emissions."""

    def __init__(self):
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)

    @property
    def count(self):
        return len(self.calls)

    @property
    def last(self):
        return self.calls[-1] if self.calls else None


@pytest.fixture
def recorder():
    return Recorder
