"""
Queue building tests: exclusion of decided books and ordering.

Run:
    pytest tests/test_recommender/test_queue.py -v
"""

from bookscout.recommender import Action, Book, ChoiceEvent, RecommenderConfig, build_queue, decided_ids

from ..conftest import NOW_MS

NO_JITTER = RecommenderConfig(jitter=0.0)


class TestDecidedIds:
    def test_union_of_liked_and_disliked(self, sample_books, make_event):
        liked = [make_event(sample_books[0])]
        disliked = [make_event(sample_books[3], action=Action.DISLIKE)]
        assert decided_ids(liked, disliked) == {"1", "4"}

    def test_empty(self):
        assert decided_ids([], []) == set()


class TestBuildQueue:
    """Queue = catalog minus decided ids, ranked when there are likes."""

    def test_no_history_keeps_catalog_order(self, sample_books):
        queue = build_queue(sample_books, [], [], now=NOW_MS)
        assert [b.id for b in queue] == ["1", "2", "3", "4", "5", "6"]

    def test_dislikes_only_keep_catalog_order(self, sample_books, make_event):
        disliked = [make_event(sample_books[1], action=Action.DISLIKE)]
        queue = build_queue(sample_books, [], disliked, now=NOW_MS)
        assert [b.id for b in queue] == ["1", "3", "4", "5", "6"]

    def test_decided_books_never_in_queue(self, sample_books, make_event):
        liked = [make_event(sample_books[0])]
        disliked = [make_event(sample_books[5], action=Action.DISLIKE)]
        queue = build_queue(sample_books, liked, disliked, now=NOW_MS, config=RecommenderConfig(seed=1))
        ids = [b.id for b in queue]
        assert "1" not in ids
        assert "6" not in ids
        assert sorted(ids) == ["2", "3", "4", "5"]

    def test_liked_author_and_genre_ranked_first(self, sample_books, make_event):
        # Liking Tolkien/Fantasy: book 2 (same author+genre), then 3 (Fantasy)
        liked = [make_event(sample_books[0])]
        queue = build_queue(sample_books, liked, [], now=NOW_MS, config=NO_JITTER)
        assert [b.id for b in queue][:2] == ["2", "3"]

    def test_everything_decided_gives_empty_queue(self, sample_books, make_event):
        liked = [make_event(b) for b in sample_books[:3]]
        disliked = [make_event(b, action=Action.DISLIKE) for b in sample_books[3:]]
        assert build_queue(sample_books, liked, disliked, now=NOW_MS) == []

    def test_empty_catalog(self):
        assert build_queue([], [], []) == []

    def test_liked_book_outside_catalog_still_scores(self, sample_books):
        outsider = Book(id="gb_zzz", title="Foundation", author="Asimov", genre="Science Fiction")
        liked = [ChoiceEvent(book=outsider, action=Action.LIKE, timestamp=NOW_MS)]
        queue = build_queue(sample_books, liked, [], now=NOW_MS, config=NO_JITTER)
        assert queue[0].id == "5"
        assert len(queue) == 6
