import unittest

from tinycommander.core.listing import Entry
from tinycommander.core.sorting import SortKey, sort_entries


def _names(entries):
    return [entry.name for entry in entries]


class SortKeyTests(unittest.TestCase):
    def test_next_cycles_through_all_keys(self):
        self.assertIs(SortKey.NAME.next(), SortKey.SIZE)
        self.assertIs(SortKey.SIZE.next(), SortKey.MODIFIED)
        self.assertIs(SortKey.MODIFIED.next(), SortKey.NAME)

    def test_labels(self):
        self.assertEqual([key.label for key in SortKey], ["Name", "Size", "Date"])


class SortEntriesTests(unittest.TestCase):
    def setUp(self):
        self.parent = Entry("..", is_directory=True)
        self.b = Entry("b.txt", size=100, modified_time=20.0)
        self.c = Entry("c.txt", size=50, modified_time=10.0)
        self.d = Entry("d", size=4096, modified_time=5.0, is_directory=True)

    def test_size_ascending_then_descending(self):
        entries = [self.b, self.parent, self.c, self.d]

        ascending = sort_entries(entries, SortKey.SIZE)
        descending = sort_entries(ascending, SortKey.SIZE, descending=True)

        self.assertEqual(_names(ascending), ["..", "d", "c.txt", "b.txt"])
        self.assertEqual(_names(descending), ["..", "d", "b.txt", "c.txt"])

    def test_name_is_case_insensitive(self):
        entries = [Entry("beta"), Entry("Alpha"), Entry("gamma"), self.parent]

        self.assertEqual(_names(sort_entries(entries)), ["..", "Alpha", "beta", "gamma"])

    def test_case_variant_names_reverse_exactly(self):
        entries = [self.parent, Entry("readme"), Entry("README"), Entry("b")]

        ascending = sort_entries(entries, SortKey.NAME)
        descending = sort_entries(entries, SortKey.NAME, descending=True)

        self.assertEqual(_names(ascending), ["..", "b", "README", "readme"])
        self.assertEqual(_names(descending), ["..", "readme", "README", "b"])
        self.assertEqual(_names(descending)[1:], _names(ascending)[:0:-1])

    def test_name_descending_reverses_each_group_only(self):
        entries = [
            self.parent,
            Entry("a.txt"),
            Entry("z.txt"),
            Entry("m", is_directory=True),
            Entry("b", is_directory=True),
        ]

        ascending = sort_entries(entries, SortKey.NAME)
        descending = sort_entries(entries, SortKey.NAME, descending=True)

        self.assertEqual(_names(ascending), ["..", "b", "m", "a.txt", "z.txt"])
        self.assertEqual(_names(descending), ["..", "m", "b", "z.txt", "a.txt"])

    def test_modified_time_orders_numerically(self):
        entries = [self.b, self.c, self.parent]

        self.assertEqual(_names(sort_entries(entries, SortKey.MODIFIED)), ["..", "c.txt", "b.txt"])

    def test_equal_keys_keep_input_order_in_both_directions(self):
        first = Entry("first", size=10)
        second = Entry("second", size=10)
        third = Entry("third", size=10)

        ascending = sort_entries([first, second, third], SortKey.SIZE)
        descending = sort_entries([first, second, third], SortKey.SIZE, descending=True)

        self.assertEqual(_names(ascending), ["first", "second", "third"])
        self.assertEqual(_names(descending), ["first", "second", "third"])

    def test_returns_new_list(self):
        entries = [self.c, self.b]

        result = sort_entries(entries)

        self.assertIsNot(result, entries)
        self.assertEqual(_names(entries), ["c.txt", "b.txt"])

    def test_without_parent_entry(self):
        self.assertEqual(_names(sort_entries([self.c, self.d])), ["d", "c.txt"])


if __name__ == "__main__":
    unittest.main()
