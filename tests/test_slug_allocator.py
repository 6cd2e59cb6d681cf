from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.services.slug_allocator import (  # noqa: E402
    MAX_SLUG_ATTEMPTS,
    SLUG_ALPHABET,
    SLUG_LENGTH,
    SlugAllocator,
    SlugExhaustionError,
    generate_slug,
)


class RecordingLookup:
    def __init__(self, taken):
        self.taken = taken
        self.calls = []

    def __call__(self, slug):
        self.calls.append(slug)
        return {"short_url": slug} if self.taken(slug) else None


def test_generated_slugs_use_alphanumeric_alphabet():
    assert len(SLUG_ALPHABET) == 62
    for _ in range(50):
        slug = generate_slug()
        assert len(slug) == SLUG_LENGTH == 8
        assert all(ch in SLUG_ALPHABET for ch in slug)


def test_first_free_candidate_is_returned_after_one_lookup():
    lookup = RecordingLookup(lambda slug: False)
    allocator = SlugAllocator(lookup)

    slug = allocator.allocate()

    assert lookup.calls == [slug]


def test_collision_moves_on_to_next_candidate():
    candidates = iter(["AAAAAAAA", "BBBBBBBB", "CCCCCCCC"])
    lookup = RecordingLookup(lambda slug: slug == "AAAAAAAA")
    allocator = SlugAllocator(lookup, generator=lambda: next(candidates))

    assert allocator.allocate() == "BBBBBBBB"
    assert lookup.calls == ["AAAAAAAA", "BBBBBBBB"]


def test_all_candidates_taken_raises_after_ten_lookups():
    lookup = RecordingLookup(lambda slug: True)
    allocator = SlugAllocator(lookup)

    with pytest.raises(SlugExhaustionError) as excinfo:
        allocator.allocate()

    assert len(lookup.calls) == MAX_SLUG_ATTEMPTS == 10
    assert excinfo.value.attempts == 10


def test_lookup_errors_propagate_unchanged():
    def broken_lookup(slug):
        raise ConnectionError("store unavailable")

    allocator = SlugAllocator(broken_lookup)

    with pytest.raises(ConnectionError):
        allocator.allocate()


def test_allocator_is_reusable_across_calls():
    lookup = RecordingLookup(lambda slug: False)
    allocator = SlugAllocator(lookup)

    allocator.allocate()
    allocator.allocate()

    assert len(lookup.calls) == 2
