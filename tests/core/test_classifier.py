import pytest

from hierarchy_sections.core.classifier import classify_change
from hierarchy_sections.core.models import ChangeKind


@pytest.mark.parametrize(
    "previous, current, expected",
    [
        (5, 3, ChangeKind.DELETED),
        (1, 0, ChangeKind.DELETED),
        (4, 4, ChangeKind.UNCHANGED),
        (0, 0, ChangeKind.UNCHANGED),
        (0, 1, ChangeKind.INSERTED),
        (4, 9, ChangeKind.INSERTED),
    ],
)
def test_classify_change(previous, current, expected):
    assert classify_change(previous, current) is expected
