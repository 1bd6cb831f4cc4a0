"""Tests for level partitioning of the category tree."""

from app.services.category_store import CategoryRecord
from app.services.selection_codec import Selection
from app.services.tree_query import breadcrumb, index_by_parent, partition


def _cat(id, name, parent_id=None, depth=0):
    return CategoryRecord(id=id, name=name, parent_id=parent_id, depth=depth)


ELECTRONICS = _cat(1, "Electronics")
LAPTOPS = _cat(2, "Laptops", 1, 1)
GAMING = _cat(3, "Gaming Laptops", 2, 2)
PHONES = _cat(4, "Phones")
ULTRABOOKS = _cat(5, "Ultrabooks", 2, 2)
AUDIO = _cat(6, "Audio", 1, 1)

ALL = [ELECTRONICS, LAPTOPS, GAMING, PHONES, ULTRABOOKS, AUDIO]


class TestPartition:
    """Test splitting categories into levels."""

    def test_nothing_selected(self):
        """Only roots are shown without a selection."""
        levels = partition(ALL, Selection())
        assert levels.roots == [ELECTRONICS, PHONES]
        assert levels.first_level == []
        assert levels.second_level == []

    def test_root_selected(self):
        """Selecting Electronics lists its direct children."""
        levels = partition(ALL, Selection(root_id=ELECTRONICS.id))
        assert levels.roots == [ELECTRONICS, PHONES]
        assert levels.first_level == [LAPTOPS, AUDIO]
        assert levels.second_level == []

    def test_full_path_selected(self):
        """Second level holds the children of the first-level selection."""
        levels = partition(ALL, Selection(ELECTRONICS.id, LAPTOPS.id, GAMING.id))
        assert levels.first_level == [LAPTOPS, AUDIO]
        assert levels.second_level == [GAMING, ULTRABOOKS]

    def test_unknown_root(self):
        """An id that matches nothing yields empty levels, not an error."""
        levels = partition(ALL, Selection(root_id=999))
        assert levels.roots == [ELECTRONICS, PHONES]
        assert levels.first_level == []
        assert levels.second_level == []

    def test_orphaned_first_selector(self):
        """First-level selector without root still resolves its own children."""
        levels = partition(ALL, Selection(first_id=LAPTOPS.id))
        assert levels.first_level == []
        assert levels.second_level == [GAMING, ULTRABOOKS]

    def test_empty_input(self):
        """No categories, no levels."""
        assert partition([], Selection(1, 2, 3)) == ([], [], [])

    def test_accepts_generator(self):
        """Input is consumed once."""
        levels = partition((cat for cat in ALL), Selection(root_id=1))
        assert levels.first_level == [LAPTOPS, AUDIO]

    def test_index_by_parent_keeps_order(self):
        """Children keep the input order."""
        children = index_by_parent(ALL)
        assert children[2] == [GAMING, ULTRABOOKS]
        assert children[None] == [ELECTRONICS, PHONES]


class TestBreadcrumb:
    """Test resolving the selected path."""

    def test_full_path(self):
        assert breadcrumb(ALL, Selection(1, 2, 3)) == [ELECTRONICS, LAPTOPS, GAMING]

    def test_stops_at_mismatch(self):
        """A first-level id under another root ends the path."""
        assert breadcrumb(ALL, Selection(PHONES.id, LAPTOPS.id, GAMING.id)) == [PHONES]

    def test_non_root_as_root(self):
        """The root selector must name a root."""
        assert breadcrumb(ALL, Selection(LAPTOPS.id)) == []

    def test_gap(self):
        """Nothing after an unset level is used."""
        assert breadcrumb(ALL, Selection(1, None, 3)) == [ELECTRONICS]
