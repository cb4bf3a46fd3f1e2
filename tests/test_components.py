"""Tests for connected-component discovery."""

import random
from collections import deque

from detection.components import find_component, new_visited, to_index, to_xy


def reference_component(mask, width, height, x, y):
    """Breadth-first 4-connected component, for comparison."""
    start = to_index(x, y, width)
    if mask[start] != 0:
        return set()
    seen = {start}
    queue = deque([(x, y)])
    while queue:
        cx, cy = queue.popleft()
        for nx, ny in ((cx + 1, cy), (cx - 1, cy), (cx, cy + 1), (cx, cy - 1)):
            if 0 <= nx < width and 0 <= ny < height:
                pos = to_index(nx, ny, width)
                if pos not in seen and mask[pos] == 0:
                    seen.add(pos)
                    queue.append((nx, ny))
    return seen


class TestCoordinates:
    def test_round_trip(self):
        assert to_index(3, 2, 7) == 17
        assert to_xy(17, 7) == (3, 2)


class TestFindComponent:
    """Tests for the iterative flood fill."""

    def test_block(self, make_mask):
        mask = make_mask(5, 5, rects=[(1, 1, 2, 2)])
        visited = new_visited(5, 5)
        component = find_component(mask, 5, 5, 1, 1, visited)
        assert sorted(component) == [6, 7, 11, 12]
        assert all(visited[pos] for pos in component)

    def test_diagonal_pixels_are_separate(self, make_mask):
        mask = make_mask(3, 3, points=[(0, 0), (1, 1), (2, 2)])
        component = find_component(mask, 3, 3, 1, 1, new_visited(3, 3))
        assert component == [4]

    def test_background_seed_returns_empty(self, make_mask):
        mask = make_mask(3, 3, points=[(0, 0)])
        assert find_component(mask, 3, 3, 2, 2, new_visited(3, 3)) == []

    def test_visited_pixels_are_skipped(self, make_mask):
        mask = make_mask(4, 1, rects=[(0, 0, 4, 1)])
        visited = new_visited(4, 1)
        first = find_component(mask, 4, 1, 0, 0, visited)
        assert len(first) == 4
        assert find_component(mask, 4, 1, 2, 0, visited) == []

    def test_mask_is_not_modified(self, make_mask):
        mask = make_mask(6, 6, rects=[(1, 1, 3, 2)])
        original = bytes(mask)
        find_component(mask, 6, 6, 1, 1, new_visited(6, 6))
        assert bytes(mask) == original

    def test_full_mask_component_does_not_recurse(self):
        width, height = 400, 400
        mask = bytes(width * height)  # every pixel is foreground
        component = find_component(mask, width, height, 0, 0, new_visited(width, height))
        assert len(component) == width * height

    def test_snake_shaped_component(self, make_mask):
        # Serpentine path that forces long detours
        width, height = 9, 9
        rects = [(0, row, 9, 1) for row in range(0, 9, 2)]
        points = [(8, 1), (0, 3), (8, 5), (0, 7)]
        mask = make_mask(width, height, rects=rects, points=points)
        component = find_component(mask, width, height, 0, 0, new_visited(width, height))
        assert len(component) == 5 * 9 + 4

    def test_matches_reference_on_random_masks(self):
        rng = random.Random(1234)
        for _ in range(50):
            width = rng.randint(1, 12)
            height = rng.randint(1, 12)
            mask = bytes(rng.choice((0, 255)) for _ in range(width * height))
            x = rng.randrange(width)
            y = rng.randrange(height)

            component = find_component(mask, width, height, x, y, new_visited(width, height))

            assert set(component) == reference_component(mask, width, height, x, y)
            assert len(component) == len(set(component))
            assert all(mask[pos] == 0 for pos in component)
